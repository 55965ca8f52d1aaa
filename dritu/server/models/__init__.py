# dritu/server/models/__init__.py
from .product import Product, ProductBase
from .company import Company, CompanyBase, CompanyType
from .employee import Employee, EmployeeBase, EmployeeRole, EmployeeStatus
from .client import Client, ClientBase, DrProfile, JobRole
from .sale import Sale, SaleBase, SaleStatus
from .people import ServiceEngineer, ServiceEngineerBase, User, UserBase, ActiveStatus, UserGroup
from .service import Service, ServiceBase, WarrantyApplicable, BillingType
from .tender import Tender, TenderBase, TenderStatus, Emd, EmdBase, EmdStatus
from .quotation import Quotation, QuotationLine, QuotationStatus

__all_models = [
    Product, Company, Employee, Client, Sale, ServiceEngineer, User,
    Service, Tender, Emd, Quotation, QuotationLine,
]
