# ivisitor/utils/templates.py
"""Shared Jinja2 environment for emails and the link-flow result pages."""

import os
from fastapi.templating import Jinja2Templates

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

templates = Jinja2Templates(directory=TEMPLATE_DIR)


def render(name: str, **context) -> str:
    """Render a template to a string outside of a request (email bodies)."""
    return templates.env.get_template(name).render(**context)
