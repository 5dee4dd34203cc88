"""
Tax rate master tests.

Verifies:
- Create assigns the next tax_code and records the acting user
- Update changes name, rate and calculation type but never the code
- Unknown codes give 404 without touching other rows
- Tax amounts follow the calculation type
"""

import pytest

from sales_manage.models import TaxRate
from sales_manage.services import tax_rate_service
from sales_manage.validation import NotFoundError, ValidationError


def _body(**overrides):
    body = {"tax_name": "10%", "rate": 10, "calculation_type": 3, "user_id": "00001"}
    body.update(overrides)
    return body


# =============================================================================
# TAX CALCULATION
# =============================================================================


class TestCalculateTax:

    @pytest.mark.parametrize(
        "calculation_type,expected",
        [
            (1, 109),
            (2, 110),
            (3, 110),
        ],
    )
    def test_rounding_modes(self, calculation_type, expected):
        assert tax_rate_service.calculate_tax(1099, 10, calculation_type) == expected

    def test_round_half_up(self):
        # 1050 * 8% = 84.0; 1056 * 8% = 84.48; 1057 * 8% = 84.56
        assert tax_rate_service.calculate_tax(1050, 8, 3) == 84
        assert tax_rate_service.calculate_tax(1056, 8, 3) == 84
        assert tax_rate_service.calculate_tax(1057, 8, 3) == 85

    def test_exempt_rate(self):
        assert tax_rate_service.calculate_tax(5000, 0, 2) == 0


# =============================================================================
# SERVICE VALIDATION
# =============================================================================


class TestTaxRateValidation:

    @pytest.mark.parametrize("rate", [-1, 100.5, "abc", None, ""])
    def test_bad_rate(self, rate):
        with pytest.raises(ValidationError):
            tax_rate_service.validate_rate(rate)

    @pytest.mark.parametrize("calculation_type", [0, 4, "x", None])
    def test_bad_calculation_type(self, calculation_type):
        with pytest.raises(ValidationError):
            tax_rate_service.validate_calculation_type(calculation_type)

    def test_string_inputs_are_coerced(self):
        assert tax_rate_service.validate_rate("8") == 8.0
        assert tax_rate_service.validate_calculation_type("2") == 2

    def test_failed_update_leaves_row_unchanged(self, make_tax_rate, db_session):
        make_tax_rate("01", tax_name="10%", rate=10)

        with pytest.raises(ValidationError):
            tax_rate_service.update_tax_rate(
                "01", tax_name="changed", rate=500, calculation_type=3, updated_by="00002",
            )

        db_session.expire_all()
        row = db_session.query(TaxRate).filter_by(tax_code="01").one()
        assert row.tax_name == "10%"
        assert row.rate == 10
        assert row.updated_by == "00001"

    def test_get_missing(self):
        with pytest.raises(NotFoundError, match="Tax code 42 does not exist"):
            tax_rate_service.get_tax_rate("42")


# =============================================================================
# API
# =============================================================================


class TestTaxRateApi:

    def test_create_assigns_next_code(self, client, make_tax_rate):
        make_tax_rate("01")
        make_tax_rate("02")

        resp = client.post("/api/tax-rates", json=_body(tax_name="8%(軽減税率)", rate=8))

        assert resp.status_code == 201
        tax_rate = resp.get_json()["tax_rate"]
        assert tax_rate["tax_code"] == "03"
        assert tax_rate["tax_name"] == "8%(軽減税率)"
        assert tax_rate["rate"] == 8
        assert tax_rate["calculation_type"] == 3
        assert tax_rate["created_by"] == "00001"
        assert tax_rate["updated_by"] == "00001"

    def test_create_then_get_round_trip(self, client):
        created = client.post("/api/tax-rates", json=_body()).get_json()["tax_rate"]

        resp = client.get(f"/api/tax-rates/{created['tax_code']}")

        assert resp.status_code == 200
        assert resp.get_json()["tax_rate"] == created

    def test_create_requires_user(self, client, db_session):
        resp = client.post("/api/tax-rates", json=_body(user_id=None))

        assert resp.status_code == 400
        assert db_session.query(TaxRate).count() == 0

    def test_create_rejects_bad_calculation_type(self, client):
        resp = client.post("/api/tax-rates", json=_body(calculation_type=9))
        assert resp.status_code == 400

    def test_create_when_exhausted(self, client, make_tax_rate):
        make_tax_rate("99")

        resp = client.post("/api/tax-rates", json=_body())

        assert resp.status_code == 400
        assert "No codes left" in resp.get_json()["error"]

    def test_next_code_preview(self, client, make_tax_rate):
        make_tax_rate("04")

        resp = client.get("/api/tax-rates/next-code")

        assert resp.status_code == 200
        assert resp.get_json() == {"success": True, "tax_code": "05"}

    def test_list_is_ordered_by_code(self, client, make_tax_rate):
        make_tax_rate("10")
        make_tax_rate("02")
        make_tax_rate("01")

        body = client.get("/api/tax-rates").get_json()

        assert body["count"] == 3
        assert [t["tax_code"] for t in body["tax_rates"]] == ["01", "02", "10"]

    def test_update(self, client, make_tax_rate):
        make_tax_rate("01", tax_name="8%", rate=8, calculation_type=3)

        resp = client.put("/api/tax-rates/01", json=_body(tax_name="10%", rate=10, calculation_type=1, user_id="00002"))

        assert resp.status_code == 200
        tax_rate = resp.get_json()["tax_rate"]
        assert tax_rate["tax_code"] == "01"
        assert tax_rate["tax_name"] == "10%"
        assert tax_rate["rate"] == 10
        assert tax_rate["calculation_type"] == 1
        assert tax_rate["created_by"] == "00001"
        assert tax_rate["updated_by"] == "00002"

    def test_update_missing(self, client):
        resp = client.put("/api/tax-rates/42", json=_body())
        assert resp.status_code == 404

    def test_delete(self, client, make_tax_rate, db_session):
        make_tax_rate("01")
        make_tax_rate("02")

        resp = client.delete("/api/tax-rates/01")

        assert resp.status_code == 200
        assert resp.get_json()["success"] is True
        assert [t.tax_code for t in db_session.query(TaxRate).all()] == ["02"]

    def test_delete_missing_changes_nothing(self, client, make_tax_rate, db_session):
        make_tax_rate("01")

        resp = client.delete("/api/tax-rates/99")

        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Tax code 99 does not exist"}
        assert db_session.query(TaxRate).count() == 1

    @pytest.mark.parametrize(
        "overrides,error",
        [
            ({"tax_name": "x" * 65}, "tax_name exceeds max length 64"),
            ({"user_id": "u" * 17}, "user_id exceeds max length 16"),
        ],
    )
    def test_create_rejects_overlong_text(self, client, db_session, overrides, error):
        resp = client.post("/api/tax-rates", json=_body(**overrides))

        assert resp.status_code == 400
        assert resp.get_json() == {"error": error}
        assert db_session.query(TaxRate).count() == 0
