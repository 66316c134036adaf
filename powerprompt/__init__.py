"""
powerprompt - Render a powerline-style shell prompt from a layered configuration.
"""
from .constants import APP_NAME, APP_VERSION, APP_DESCRIPTION

__version__ = APP_VERSION
__all__ = ['APP_NAME', 'APP_VERSION', 'APP_DESCRIPTION']
