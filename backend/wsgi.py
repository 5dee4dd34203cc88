# backend/wsgi.py
# FLASK_APP target and standalone server: python wsgi.py
from sales_manage import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=app.config["PORT"])
