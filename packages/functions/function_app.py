"""Azure Functions entry point (Python v2 programming model).

The host imports this module once per worker process; AUTH_JWT_SECRET must be
set in the app settings (or local.settings.json), otherwise indexing fails.
"""

from storefront_auth.settings import AuthSettings
from storefront_functions.handlers import create_function_app
from storefront_manager.context import StorefrontContext

app = create_function_app(StorefrontContext.from_settings(AuthSettings.from_env()))
