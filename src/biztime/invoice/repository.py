from datetime import date

from biztime.access import Criteria, DataAccess
from biztime.result import Result
from biztime.tables import COMPANIES, INVOICES
from biztime.validators import PreparedPayload, prepare_insert_payload, prepare_update_payload


class InvoiceRepository:
    """
    Repository for invoice-related data access.
    Encapsulates the column sets used against the invoices table.
    """

    REQUIRED_KEYS = ("comp_code", "amt")
    # paid and add_date have column defaults; paid_date is nullable
    OPTIONAL_KEYS = ("paid", "add_date", "paid_date")
    UPDATABLE_KEYS = ("comp_code", "amt", "paid", "paid_date")
    ALL_COLUMNS = "id, comp_code, amt, paid, add_date, paid_date"

    def __init__(self, access: DataAccess):
        self.access = access

    def list(self) -> Result:
        """List all invoices (id, comp_code)."""
        return self.access.select_all("id, comp_code", INVOICES)

    def list_unpaid(self) -> Result:
        return self.access.select_many(self.ALL_COLUMNS, INVOICES, Criteria.equals("paid", False))

    def get(self, invoice_id: int) -> Result:
        """
        Get invoice by id with its company nested under `company`.

        The comp_code column is replaced by the company record. If the
        company lookup fails the invoice is returned with comp_code intact.
        """
        invoice = self.access.select_one(self.ALL_COLUMNS, INVOICES, Criteria.equals("id", invoice_id))
        if not invoice.success:
            return invoice

        record = dict(invoice.payload)
        company = self.access.select_one(
            "code, name, description",
            COMPANIES,
            Criteria.equals("code", record["comp_code"]),
        )
        if company.success:
            del record["comp_code"]
            record["company"] = company.payload

        return Result.ok(record)

    def create(self, body: dict) -> Result:
        """
        Create an invoice from a request body.

        Raises:
            ValidationError: If comp_code or amt is missing
        """
        payload = prepare_insert_payload(self.REQUIRED_KEYS, self.OPTIONAL_KEYS, body)
        return self.access.insert(INVOICES, payload, self.ALL_COLUMNS)

    def update(self, invoice_id: int, body: dict) -> Result:
        """
        Update any of comp_code, amt, paid, paid_date.

        Raises:
            ValidationError: If the body holds nothing updatable
        """
        payload = prepare_update_payload(self.UPDATABLE_KEYS, body)
        return self.access.update(INVOICES, "id", invoice_id, payload)

    def pay(self, invoice_id: int, paid_on: date = None) -> Result:
        """Mark an invoice paid as of `paid_on` (default today)."""
        payload = PreparedPayload.from_pairs(
            [("paid", True), ("paid_date", paid_on or date.today())]
        )
        return self.access.update(INVOICES, "id", invoice_id, payload)

    def delete(self, invoice_id: int) -> Result:
        return self.access.delete(INVOICES, Criteria.equals("id", invoice_id), self.ALL_COLUMNS)
