"""
WSGI / Flask-Migrate entry point.

Usage:
    gunicorn wsgi:app
    flask --app wsgi db init       # first time only (creates migrations/)
    flask --app wsgi db migrate -m "description"
    flask --app wsgi db upgrade
    flask --app wsgi create-admin --name "Admin" --email admin@dopt.gov.in --password secret123
"""

from igot_tracker import create_app

app = create_app()
