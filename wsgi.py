"""WSGI entry point: `gunicorn wsgi:app` or `flask --app wsgi run`."""
import sys
import os

sys.path.insert(0, os.path.dirname(__file__))

from billing import create_app

app = create_app()

if __name__ == "__main__":
    app.run()
