"""
Integration tests for InvoiceRepository.

Run with: BIZTIME_ENV=test pytest src/biztime/invoice/repository_test.py -v
"""
from datetime import date

import pytest

from biztime.result import ErrorKind, ValidationError


class TestCreate:
    """Tests for InvoiceRepository.create()"""

    def test_create_with_defaults(self, invoice_repo, sample_company):
        result = invoice_repo.create({"comp_code": "apple", "amt": 150})

        assert result.success is True
        invoice = result.payload
        assert invoice["id"] is not None
        assert invoice["comp_code"] == "apple"
        assert invoice["amt"] == 150
        assert invoice["paid"] is False
        assert invoice["add_date"] == date.today()
        assert invoice["paid_date"] is None

    def test_create_with_optional_fields(self, invoice_repo, sample_company):
        result = invoice_repo.create(
            {"comp_code": "apple", "amt": 150, "paid": True, "paid_date": "2024-03-01"}
        )

        assert result.payload["paid"] is True
        assert result.payload["paid_date"] == date(2024, 3, 1)

    @pytest.mark.parametrize("body", [
        {"amt": 150},
        {"comp_code": "apple"},
        {"comp_code": "apple", "paid": True},
    ])
    def test_create_missing_required_raises(self, invoice_repo, body):
        with pytest.raises(ValidationError, match="Missing required"):
            invoice_repo.create(body)

    @pytest.mark.parametrize("body", [
        {"comp_code": "apple", "amt": -5},       # check constraint
        {"comp_code": "ghost", "amt": 10},       # foreign key
        {"comp_code": "apple", "amt": "lots"},   # type mismatch
    ])
    def test_create_rejected_by_store(self, invoice_repo, sample_company, body):
        result = invoice_repo.create(body)

        assert result.success is False
        assert result.error.kind is ErrorKind.QUERY


class TestGet:
    """Tests for InvoiceRepository.get()"""

    def test_get_nests_company(self, invoice_repo, sample_invoices):
        invoice = sample_invoices[2]

        result = invoice_repo.get(invoice["id"])

        assert result.payload == {
            "id": invoice["id"],
            "amt": 300,
            "paid": True,
            "add_date": invoice["add_date"],
            "paid_date": date(2018, 1, 1),
            "company": {
                "code": "apple",
                "name": "Apple Computer",
                "description": "Maker of OSX.",
            },
        }

    def test_get_not_found(self, invoice_repo):
        result = invoice_repo.get(999)

        assert result.error.kind is ErrorKind.NOT_FOUND


class TestList:
    """Tests for InvoiceRepository.list() and list_unpaid()"""

    def test_list(self, invoice_repo, sample_invoices):
        result = invoice_repo.list()

        assert result.payload == [{"id": i["id"], "comp_code": "apple"} for i in sample_invoices]

    def test_list_unpaid(self, invoice_repo, sample_invoices):
        result = invoice_repo.list_unpaid()

        assert [i["id"] for i in result.payload] == [i["id"] for i in sample_invoices[:2]]


class TestUpdate:
    """Tests for InvoiceRepository.update() and pay()"""

    def test_update_amount(self, invoice_repo, sample_invoices):
        invoice_id = sample_invoices[0]["id"]

        result = invoice_repo.update(invoice_id, {"amt": 500})

        assert result.payload == {"id": invoice_id, "amt": 500}

    def test_update_not_found(self, invoice_repo):
        result = invoice_repo.update(999, {"amt": 500})

        assert result.is_not_found

    def test_update_nothing_raises(self, invoice_repo):
        with pytest.raises(ValidationError):
            invoice_repo.update(1, {"add_date": "2024-01-01"})

    def test_pay(self, invoice_repo, sample_invoices):
        invoice_id = sample_invoices[0]["id"]

        result = invoice_repo.pay(invoice_id, paid_on=date(2024, 5, 6))

        assert result.payload == {"id": invoice_id, "paid": True, "paid_date": date(2024, 5, 6)}


class TestDelete:
    """Tests for InvoiceRepository.delete()"""

    def test_delete(self, invoice_repo, sample_invoices):
        invoice_id = sample_invoices[0]["id"]

        result = invoice_repo.delete(invoice_id)

        assert result.status == "deleted"
        assert [row["id"] for row in result.payload] == [invoice_id]
        assert invoice_repo.delete(invoice_id).is_not_found
