from biztime.access import Criteria, DataAccess
from biztime.result import Result
from biztime.tables import COMPANIES, INVOICES
from biztime.validators import prepare_insert_payload, prepare_update_payload


class CompanyRepository:
    """
    Repository for company-related data access.
    Encapsulates the column sets used against the companies table.
    """

    REQUIRED_KEYS = ("code", "name")
    OPTIONAL_KEYS = ("description",)
    UPDATABLE_KEYS = ("name", "description")
    DETAIL_COLUMNS = "code, name, description"

    def __init__(self, access: DataAccess):
        self.access = access

    def list(self) -> Result:
        """List all companies (code, name)."""
        return self.access.select_all("code, name", COMPANIES)

    def get(self, code: str) -> Result:
        """Get company by code."""
        return self.access.select_one(self.DETAIL_COLUMNS, COMPANIES, Criteria.equals("code", code))

    def get_with_invoices(self, code: str) -> Result:
        """Get company by code, with the ids of its invoices under `invoices`."""
        company = self.get(code)
        if not company.success:
            return company

        invoices = self.access.select_many("id", INVOICES, Criteria.equals("comp_code", code))
        if not invoices.success:
            return invoices

        return Result.ok({**company.payload, "invoices": [row["id"] for row in invoices.payload]})

    def create(self, body: dict) -> Result:
        """
        Create a company from a request body.

        Raises:
            ValidationError: If code or name is missing
        """
        payload = prepare_insert_payload(self.REQUIRED_KEYS, self.OPTIONAL_KEYS, body)
        return self.access.insert(COMPANIES, payload, self.DETAIL_COLUMNS)

    def update(self, code: str, body: dict) -> Result:
        """
        Update name and/or description.

        Raises:
            ValidationError: If the body holds nothing updatable
        """
        payload = prepare_update_payload(self.UPDATABLE_KEYS, body)
        return self.access.update(COMPANIES, "code", code, payload)

    def delete(self, code: str) -> Result:
        """Delete a company; its invoices go with it."""
        return self.access.delete(COMPANIES, Criteria.equals("code", code), self.DETAIL_COLUMNS)
