"""``.env.example`` generation from schemas."""

from .env_example import collect_variables, render_env_example, write_env_example
from .renderer import TemplateRenderer
