"""
WSGI entry point.

Serve from the checkout: templates/ and prompts.db live beside app.py.
  - Working dir:    <checkout>
  - WSGI file:      <checkout>/wsgi.py
  - Virtualenv:     <checkout>/.venv  (pip install -e .)
"""
import sys
import os

project_dir = os.path.dirname(os.path.abspath(__file__))
if project_dir not in sys.path:
    sys.path.insert(0, project_dir)

from app import app as application  # noqa: F401
