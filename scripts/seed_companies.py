"""Seed starter companies and invoices into the database."""
from biztime.access import DataAccess
from biztime.company import CompanyRepository
from biztime.db import Database
from biztime.invoice import InvoiceRepository

INITIAL_COMPANIES = [
    {"code": "apple", "name": "Apple Computer", "description": "Maker of OSX."},
    {"code": "ibm", "name": "IBM", "description": "Big blue."},
]

INITIAL_INVOICES = [
    {"comp_code": "apple", "amt": 100, "paid": False},
    {"comp_code": "apple", "amt": 200, "paid": False},
    {"comp_code": "apple", "amt": 300, "paid": True, "paid_date": "2018-01-01"},
    {"comp_code": "ibm", "amt": 400, "paid": False},
]


def main():
    database = Database.from_config()
    database.open(wait=True)
    access = DataAccess(database)
    companies_repo = CompanyRepository(access)
    invoices_repo = InvoiceRepository(access)

    try:
        for company in INITIAL_COMPANIES:
            if companies_repo.get(company["code"]).success:
                print(f"Skipping {company['code']} - already exists")
                continue

            result = companies_repo.create(company)
            if not result.success:
                print(f"Failed to create {company['code']}: {result.error.message}")
                continue
            print(f"Created: {result.payload['code']} ({result.payload['name']})")

            for invoice in INITIAL_INVOICES:
                if invoice["comp_code"] != company["code"]:
                    continue
                created = invoices_repo.create(invoice)
                if created.success:
                    print(f"  Invoice #{created.payload['id']} for {created.payload['amt']}")
    finally:
        database.close()


if __name__ == "__main__":
    main()
