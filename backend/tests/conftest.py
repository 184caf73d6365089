"""Shared fixtures: in-memory database and a sample bureau report."""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from credit_report_api.database import Base
from credit_report_api.models import db_models  # noqa: F401


SAMPLE_REPORT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<INProfileResponse>
  <Header>
    <SystemCode>0</SystemCode>
    <ReportDate>20240914</ReportDate>
  </Header>
  <Current_Application>
    <Current_Application_Details>
      <Enquiry_Reason>6</Enquiry_Reason>
      <Current_Applicant_Details>
        <Last_Name>Sharma</Last_Name>
        <First_Name>Sagar</First_Name>
        <Gender_Code>1</Gender_Code>
        <MobilePhoneNumber>9819137672</MobilePhoneNumber>
      </Current_Applicant_Details>
    </Current_Application_Details>
  </Current_Application>
  <CAIS_Account>
    <CAIS_Summary>
      <Credit_Account>
        <CreditAccountTotal>4</CreditAccountTotal>
        <CreditAccountActive>3</CreditAccountActive>
        <CreditAccountDefault>0</CreditAccountDefault>
        <CreditAccountClosed>1</CreditAccountClosed>
      </Credit_Account>
      <Total_Outstanding_Balance>
        <Outstanding_Balance_Secured>85000</Outstanding_Balance_Secured>
        <Outstanding_Balance_UnSecured>160000</Outstanding_Balance_UnSecured>
        <Outstanding_Balance_All>245000</Outstanding_Balance_All>
      </Total_Outstanding_Balance>
    </CAIS_Summary>
    <CAIS_Account_DETAILS>
      <Subscriber_Name>ICICI Bank</Subscriber_Name>
      <Account_Number>ACC123456789</Account_Number>
      <Portfolio_Type>R</Portfolio_Type>
      <Account_Type code="10">10</Account_Type>
      <Open_Date>20190710</Open_Date>
      <Credit_Limit_Amount>100000</Credit_Limit_Amount>
      <Highest_Credit_or_Original_Loan_Amount>100000</Highest_Credit_or_Original_Loan_Amount>
      <Account_Status>11</Account_Status>
      <Current_Balance>60000</Current_Balance>
      <Amount_Past_Due>0</Amount_Past_Due>
      <Date_Reported>20240831</Date_Reported>
      <Date_Closed></Date_Closed>
      <CAIS_Holder_Details>
        <Surname_Non_Normalized>Sharma</Surname_Non_Normalized>
        <Income_TAX_PAN>ABCDE1234F</Income_TAX_PAN>
      </CAIS_Holder_Details>
      <CAIS_Holder_Address_Details>
        <First_Line_Of_Address_non_normalized>Flat 12</First_Line_Of_Address_non_normalized>
        <Second_Line_Of_Address_non_normalized>MG Road</Second_Line_Of_Address_non_normalized>
        <City_non_normalized>Mumbai</City_non_normalized>
        <State_non_normalized>27</State_non_normalized>
        <ZIP_Postal_Code_non_normalized>400001</ZIP_Postal_Code_non_normalized>
      </CAIS_Holder_Address_Details>
      <CAIS_Holder_Address_Details>
        <City_non_normalized>Pune</City_non_normalized>
        <State_non_normalized>27</State_non_normalized>
        <ZIP_Postal_Code_non_normalized>411001</ZIP_Postal_Code_non_normalized>
      </CAIS_Holder_Address_Details>
    </CAIS_Account_DETAILS>
    <CAIS_Account_DETAILS>
      <Subscriber_Name>HDFC Bank</Subscriber_Name>
      <Account_Number>XXXX5678</Account_Number>
      <Portfolio_Type>I</Portfolio_Type>
      <Account_Type>02</Account_Type>
      <Open_Date>20150102</Open_Date>
      <Date_Closed>20230405</Date_Closed>
      <Account_Status>13</Account_Status>
      <Current_Balance>0</Current_Balance>
    </CAIS_Account_DETAILS>
  </CAIS_Account>
  <TotalCAPS_Summary>
    <TotalCAPSLast7Days>2</TotalCAPSLast7Days>
    <TotalCAPSLast30Days>3</TotalCAPSLast30Days>
  </TotalCAPS_Summary>
  <SCORE>
    <BureauScore>719</BureauScore>
    <BureauScoreConfidLevel>H</BureauScoreConfidLevel>
  </SCORE>
</INProfileResponse>
"""


@pytest.fixture
def sample_xml():
    return SAMPLE_REPORT_XML


@pytest.fixture
def db_engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    try:
        yield session
    finally:
        session.close()
