from dotenv import load_dotenv
import os

load_dotenv()

# Role values stored in profiles.role
ROLE_ADMIN = 'ADMIN'
ROLE_USER = 'USER'

# Fixed identity used when DEV_MODE=true
DEV_USER_ID = '00000000-0000-0000-0000-000000000001'
DEV_USER_EMAIL = 'local@plazen.org'

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes')


class Settings:
    def __init__(self) -> None:
        # Supabase (support both naming conventions for the service key)
        self.SUPABASE_URL = os.getenv('SUPABASE_URL')
        self.SUPABASE_SECRET_KEY = os.getenv('SUPABASE_SECRET_KEY') or os.getenv('SUPABASE_SERVICE_ROLE_KEY')
        self.SUPABASE_JWT_SECRET = os.getenv('SUPABASE_JWT_SECRET')
        self.DATABASE_URL = os.getenv('DATABASE_URL')
        # Session credential
        self.AUTH_COOKIE_NAME = os.getenv('AUTH_COOKIE_NAME', 'sb-access-token')
        # Runtime
        self.DEV_MODE = _env_flag('DEV_MODE') or _env_flag('NEXT_PUBLIC_DEV_MODE')
        self.IS_PRODUCTION = bool(os.getenv('RAILWAY_ENVIRONMENT')) or os.getenv('FLASK_ENV') == 'production'
        self.PORT = int(os.getenv('PORT', 8000))
        origins = os.getenv('ALLOWED_ORIGINS')
        self.ALLOWED_ORIGINS = (
            [o.strip() for o in origins.split(',') if o.strip()] if origins else list(DEFAULT_ALLOWED_ORIGINS)
        )

    def override(self, values: dict) -> None:
        """Apply overrides for keys that exist on this object."""
        for key, value in values.items():
            if hasattr(self, key):
                setattr(self, key, value)
