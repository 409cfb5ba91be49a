"""WSGI entrypoint: gunicorn -c deploy/gunicorn.conf.py zenspace.wsgi:app"""

from zenspace import create_app

app = create_app()
