"""
CLI command tests (flask system / flask users).
"""

from sales_manage.models import Customer, Staff, TaxRate, User
from sales_manage.services import auth_service, seed_service


class TestSystemInit:

    def test_init_seeds_master_data(self, app, db_session):
        result = app.test_cli_runner().invoke(args=["system", "init"])

        assert result.exit_code == 0, result.output
        assert "DONE Database initialized" in result.output
        assert [u.user_id for u in auth_service.list_users()] == ["00001", "00002"]
        assert db_session.query(TaxRate).count() == 5
        assert db_session.query(Staff).count() == 3
        assert db_session.query(Customer).count() == 1

    def test_init_is_idempotent(self, app, db_session):
        runner = app.test_cli_runner()
        runner.invoke(args=["system", "init"])

        result = runner.invoke(args=["system", "init"])

        assert result.exit_code == 0, result.output
        assert "users: 0 created" in result.output
        assert db_session.query(User).count() == 2
        assert db_session.query(TaxRate).count() == 5
        assert db_session.query(Staff).count() == 3
        assert db_session.query(Customer).count() == 1

    def test_seed_users_can_log_in(self, client):
        seed_service.initialize_database()

        resp = client.post("/api/login", json={"user_id": "00002", "password": "password2"})

        assert resp.status_code == 200

    def test_seed_tax_rates(self, db_session):
        seed_service.initialize_database()

        rows = {t.tax_code: t for t in db_session.query(TaxRate).all()}
        assert [rows[code].tax_name for code in sorted(rows)] == [
            "10%", "8%(軽減税率)", "8%(経過措置)", "非課税", "対象外",
        ]
        assert {t.calculation_type for t in rows.values()} == {3}
        assert {t.created_by for t in rows.values()} == {"00001"}

    def test_seed_customer_points_at_first_staff(self, db_session):
        seed_service.initialize_database()

        first_staff = db_session.query(Staff).order_by(Staff.id.asc()).first()
        assert db_session.query(Customer).one().staff_id == first_staff.id

    def test_existing_staff_are_not_seeded_over(self, staff_member, db_session):
        counts = seed_service.initialize_database()

        assert counts["staff"] == 0
        assert db_session.query(Staff).count() == 1


class TestUsersCommands:

    def test_create_and_list(self, app):
        runner = app.test_cli_runner()

        created = runner.invoke(args=["users", "create", "--email", "cli@example.com", "--password", "password123"])
        listed = runner.invoke(args=["users", "list"])

        assert created.exit_code == 0, created.output
        assert "PASS Created user 00001" in created.output
        assert "cli@example.com" in listed.output

    def test_create_duplicate_email(self, app, user):
        result = app.test_cli_runner().invoke(
            args=["users", "create", "--email", "user1@example.com", "--password", "password123"],
        )

        assert result.exit_code != 0
        assert "already registered" in result.output

    def test_list_empty(self, app):
        result = app.test_cli_runner().invoke(args=["users", "list"])
        assert "No users found." in result.output
