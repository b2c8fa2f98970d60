DISCLAIMER = ("Indicative terms are based on the information provided and the stated assumptions, and remain subject "
"to credit committee approval. Further information may be requested during underwriting depending on the nature of "
"the transaction, the circumstances of the borrower and the type of property.")

UW_CATEGORIES = {"ASSUMPTIONS":"Assumptions","BROKER":"Broker","BORROWER":"Borrower","COMPANY":"Company",
"PROPERTY":"Property","PROPERTY_HMO":"Property - HMO","PROPERTY_MUFB":"Property - MUFB",
"PROPERTY_HOLIDAY_LET":"Property - Holiday Let","ADDITIONAL":"Additional Requirements"}

UW_STAGES = {"DIP":"DIP","INDICATIVE":"Indicative","BOTH":"Both"}

CONDITION_OPERATORS = {"EQUALS":"equals","NOT_EQUALS":"notEquals","IN":"in","NOT_IN":"notIn",
"GREATER_THAN":"greaterThan","LESS_THAN":"lessThan","EXISTS":"exists","NOT_EXISTS":"notExists",
"CONTAINS":"contains"}

CATEGORY_ORDER = [UW_CATEGORIES[k] for k in ("ASSUMPTIONS","BROKER","BORROWER","COMPANY","PROPERTY",
"PROPERTY_HMO","PROPERTY_MUFB","PROPERTY_HOLIDAY_LET","ADDITIONAL")]

# Quote answers offered by the sidebar. ``hmo`` / ``holiday`` / ``mufb`` come
# from the criteria table, where anything other than "No" switches the
# property-specific requirements on.
LOAN_PURPOSES = ["purchase","refinance","capital_raise"]
BORROWER_TYPES = ["personal","company"]
YES_NO = ["No","Yes"]

_A, _BR, _B, _C = "Assumptions", "Broker", "Borrower", "Company"
_P, _HMO, _MUFB, _HOL, _ADD = "Property", "Property - HMO", "Property - MUFB", "Property - Holiday Let", "Additional Requirements"

_REFI = [{"field":"loan_purpose","operator":"in","value":["refinance","Refinance","REFINANCE","capital_raise"]}]
_PURCHASE = [{"field":"loan_purpose","operator":"in","value":["purchase","Purchase","PURCHASE"]}]
_PERSONAL = [{"field":"borrower_type","operator":"contains","value":"personal"}]
_COMPANY = [{"field":"borrower_type","operator":"contains","value":"company"}]
_IS_HMO = [{"field":"hmo","operator":"notEquals","value":"No"}]
_IS_HOLIDAY = [{"field":"holiday","operator":"notEquals","value":"No"}]
_IS_MUFB = [{"field":"mufb","operator":"notEquals","value":"No"}]

DEFAULT_UW_REQUIREMENTS = [
    # Assumptions
    {"id":"assumption_intro","category":_A,"stage":"Indicative","required":False,"order":1,"conditions":[],
     "description":"The indicative terms provided are based on the information provided, the following assumptions and subject to Credit committee approval"},
    {"id":"assumption_clean_credit","category":_A,"stage":"Indicative","required":False,"order":2,"conditions":[],
     "description":"The Borrower has a clean credit history, is an experienced landlord and is a UK national or limited company"},
    {"id":"assumption_residential_unit","category":_A,"stage":"Indicative","required":False,"order":3,"conditions":[],
     "description":"The property is a residential unit intended for occupancy by a single household"},
    {"id":"assumption_valuation","category":_A,"stage":"Indicative","required":False,"order":4,"conditions":[],
     "description":"The valuation figure provided reflects the 180-day market value of the property in its current condition"},
    {"id":"assumption_revised_terms","category":_A,"stage":"Indicative","required":False,"order":5,"conditions":[],"pdfOnly":True,
     "description":"If any of these assumptions do not apply, the indicative terms provided may need to be revised to comply with our lending policy."},
    {"id":"assumption_dip_intro","category":_A,"stage":"DIP","required":False,"order":6,"conditions":[],"pdfOnly":True,
     "description":"The following list comprises the standard information required for underwriting purposes. Note that further information may be requested during the underwriting process depending on the nature of the transaction, specific circumstances of the borrower and the type of property."},
    # Broker
    {"id":"broker_proc_fee_route","category":_BR,"stage":"Indicative","required":True,"order":1,"conditions":[],
     "description":"Confirmation of your proc fee payment route (Mortgage Club, Network, Packager or other)."},
    # Borrower
    {"id":"borrower_als","category":_B,"stage":"Both","required":True,"order":1,"conditions":[],
     "description":"Asset and Liability Statement for any individual Borrowers, Shareholders or Guarantors (Blank form attached for your ease)"},
    {"id":"borrower_signed_dip","category":_B,"stage":"DIP","required":True,"order":2,"conditions":[],
     "description":"Signed Decision in Principle (\"DIP\")"},
    {"id":"borrower_entity_name","category":_B,"stage":"Indicative","required":True,"order":3,"conditions":[],
     "description":"Name of the borrowing entity"},
    {"id":"borrower_address_history","category":_B,"stage":"DIP","required":True,"order":4,"conditions":[],
     "description":"Main residential address for the borrower (individual) or key principal / shareholder (companies) - covers 3 years history"},
    {"id":"borrower_contact_details","category":_B,"stage":"DIP","required":True,"order":5,"conditions":[],
     "description":"Contact details for the borrower (name, email, phone no.) and person providing access to the property for valuation"},
    {"id":"borrower_proof_of_id","category":_B,"stage":"DIP","required":True,"order":6,"conditions":[],
     "description":"Proof of identity for individual borrowers, guarantors or shareholders >25%: passport or internationally accepted document"},
    {"id":"borrower_proof_of_address","category":_B,"stage":"DIP","required":True,"order":7,"conditions":[],
     "description":"Proof of address for individual borrowers, guarantors or shareholders >25%: bank statement or utility bill dated within the last 3 months"},
    {"id":"borrower_solicitor_details","category":_B,"stage":"DIP","required":True,"order":8,"conditions":[],
     "description":"Details of the borrower's solicitor (Law Society registered firm with at least 2 SRA regulated partners, sole conveyancing practices not accepted)"},
    {"id":"borrower_dd_mandate","category":_B,"stage":"DIP","required":True,"order":9,"conditions":[],
     "description":"Completed and signed direct debit mandate"},
    {"id":"borrower_loan_purpose","category":_B,"stage":"DIP","required":True,"order":10,"conditions":[],
     "description":"Purpose of loan (purchase / refinance / capital raise)"},
    {"id":"borrower_exit_strategy","category":_B,"stage":"DIP","required":True,"order":11,"conditions":[],
     "description":"Proposed exit strategy / source of repayment"},
    {"id":"borrower_use_of_funds","category":_B,"stage":"Indicative","required":True,"order":12,"conditions":[],
     "description":"Breakdown of use of funds (including cost estimate for any proposed works)"},
    {"id":"borrower_source_of_wealth","category":_B,"stage":"Indicative","required":True,"order":13,"conditions":[],
     "description":"Explanation of the borrower's source of wealth (i.e. income from employment, investment, inheritance, capital appreciation of assets)"},
    {"id":"borrower_source_of_funds","category":_B,"stage":"DIP","required":True,"order":14,"conditions":[],
     "description":"Confirmation of the source of funds for the transaction"},
    {"id":"borrower_source_of_funds_evidence","category":_B,"stage":"DIP","required":True,"order":15,"conditions":[],
     "description":"Supporting evidence for the source of funds for the transaction"},
    {"id":"borrower_redemption_statement","category":_B,"stage":"DIP","required":True,"order":16,"conditions":_REFI,
     "description":"Redemption statement from the existing lender/s (if refinance)"},
    {"id":"borrower_purchase_contract","category":_B,"stage":"DIP","required":True,"order":17,"conditions":_PURCHASE,
     "description":"Copy of the purchase contract (if purchase)"},
    {"id":"borrower_product_selection","category":_B,"stage":"Indicative","required":True,"order":18,"conditions":[],
     "description":"Confirmation of which product and fee range your client would like to proceed with"},
    {"id":"borrower_occupation","category":_B,"stage":"DIP","required":True,"order":19,"conditions":_PERSONAL,
     "description":"Confirmation of borrower's occupation (employed) or business activities (self-employed) and estimated income"},
    {"id":"borrower_proof_of_income","category":_B,"stage":"DIP","required":True,"order":20,"conditions":_PERSONAL,
     "description":"Proof of income: three months payslips or bank statements (employed) or latest two years SA302 / tax calculations (self-employed)"},
    # Company
    {"id":"company_incorporation","category":_C,"stage":"DIP","required":True,"order":1,"conditions":_COMPANY,
     "description":"Certificate of incorporation (UK corporate), trust deed (UK trust) or equivalent incorporation documents (overseas entities)",
     "guidance":"Refer to: https://www.consilium.europa.eu/prado/en/search-by-document-country.html"},
    {"id":"company_accounts","category":_C,"stage":"DIP","required":True,"order":2,"conditions":_COMPANY,
     "description":"Last two years financial accounts and most recent management accounts"},
    # Property
    {"id":"property_particulars","category":_P,"stage":"Both","required":True,"order":1,"conditions":[],
     "description":"Property particulars: address, type (HMO, MUFB, Holiday Let etc), planning use, tenure, leasehold term (if applicable)"},
    {"id":"property_unit_size","category":_P,"stage":"DIP","required":True,"order":2,"conditions":[],
     "description":"Confirmation the size of each individual unit is 30 sqm or more"},
    {"id":"property_tenancy_status","category":_P,"stage":"Indicative","required":True,"order":3,"conditions":[],
     "description":"Confirmation if the property is currently tenanted or vacant"},
    {"id":"property_specifications","category":_P,"stage":"DIP","required":True,"order":4,"conditions":[],
     "description":"Property specifications: internal area and no bedrooms by unit, condition, communal areas, outside space, parking"},
    {"id":"property_tenancy_schedule","category":_P,"stage":"DIP","required":True,"order":5,"conditions":[],
     "description":"Tenancy schedule detailing tenancy status, monthly rental and lease termination dates by unit"},
    {"id":"property_leases","category":_P,"stage":"DIP","required":True,"order":6,"conditions":[],
     "description":"Copies of all leases (including commercial and ASTs) relating to the property"},
    {"id":"property_works_schedule","category":_P,"stage":"DIP","required":False,"order":7,"conditions":[],
     "description":"Schedule of works and costing where any refurbishment or remediation works are proposed"},
    # HMO
    {"id":"hmo_bedroom_count","category":_HMO,"stage":"Indicative","required":True,"order":1,"conditions":_IS_HMO,
     "description":"Number of bedrooms and communal areas"},
    {"id":"hmo_room_sizes","category":_HMO,"stage":"DIP","required":True,"order":2,"conditions":_IS_HMO,
     "description":"Room size of each bedroom, kitchen and any other communal areas"},
    {"id":"hmo_planning","category":_HMO,"stage":"DIP","required":True,"order":3,"conditions":_IS_HMO,
     "description":"Evidence the property has the correct planning use to be operated as an HMO and meets Local Authority requirements"},
    {"id":"hmo_licence","category":_HMO,"stage":"DIP","required":True,"order":4,"conditions":_IS_HMO,
     "description":"Where applicable an HMO licence is to be in place prior to completion"},
    # Holiday let
    {"id":"holiday_let_experience","category":_HOL,"stage":"DIP","required":True,"order":1,"conditions":_IS_HOLIDAY,
     "description":"Details of Borrower's previous experience of managing holiday lets and track record"},
    {"id":"holiday_let_planning","category":_HOL,"stage":"DIP","required":True,"order":2,"conditions":_IS_HOLIDAY,
     "description":"Evidence the property has the correct planning use to be operated as a holiday let"},
    {"id":"holiday_let_bank_statements","category":_HOL,"stage":"DIP","required":False,"order":3,"conditions":_IS_HOLIDAY,
     "description":"Copies of last 12 months' bank statements (if available) evidencing rental received"},
    {"id":"holiday_let_forecast","category":_HOL,"stage":"Indicative","required":True,"order":4,"conditions":_IS_HOLIDAY,
     "description":"12 month rental forecast (to be verified via valuer / estate agents at a later stage)"},
    {"id":"holiday_let_seasonal_income","category":_HOL,"stage":"Indicative","required":True,"order":5,"conditions":_IS_HOLIDAY,
     "description":"High, medium and low season rental income figures (lending based on average confirmed by valuer at 30 weeks occupancy)"},
    {"id":"holiday_let_ast_rental","category":_HOL,"stage":"Indicative","required":True,"order":6,"conditions":_IS_HOLIDAY,
     "description":"Forecast achievable rental amount based on a single AST letting"},
    # MUFB
    {"id":"mufb_unit_breakdown","category":_MUFB,"stage":"Indicative","required":True,"order":1,"conditions":_IS_MUFB,
     "description":"Breakdown of unit types (residential, office, retail etc.)"},
    {"id":"mufb_planning_use","category":_MUFB,"stage":"DIP","required":True,"order":2,"conditions":_IS_MUFB,
     "description":"Confirmation of planning use for each unit"},
    {"id":"mufb_value_rental_breakdown","category":_MUFB,"stage":"DIP","required":True,"order":3,"conditions":_IS_MUFB,
     "description":"Breakdown of value and rental income (forecast or actual if tenanted) by individual unit"},
    # Additional
    {"id":"additional_aml_high_risk","category":_ADD,"stage":"DIP","required":False,"order":1,"conditions":[],
     "description":"Use this section for any additional AML items for Med / High risk (e.g. second Proof of address)"},
    {"id":"additional_rental_bank_statements","category":_ADD,"stage":"DIP","required":False,"order":2,"conditions":[],
     "description":"Use this section if bank statements are required specifically to verify receipt of rental income"},
]
