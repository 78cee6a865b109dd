# portfolio/config.py
import os
from pathlib import Path
from dotenv import load_dotenv

# --- Load env from portfolio/.env OR .env (whichever exists) ---
# Works whether you run from repo root or portfolio/
root = Path(__file__).resolve().parents[1]          # project root
package_env = root / "portfolio" / ".env"
root_env = root / ".env"
if package_env.exists():
    load_dotenv(package_env)
elif root_env.exists():
    load_dotenv(root_env)

ENV = os.getenv("ENV", "dev").lower()
AUTO_MIGRATE = os.getenv("AUTO_MIGRATE", "false").strip().lower() == "true"

# === Sessions (stateless JWT) ===
JWT_SECRET = os.getenv("JWT_SECRET") or os.getenv("SECRET_KEY") or ""
if not JWT_SECRET:
    if ENV not in {"dev", "test", "local"}:
        raise ValueError("Missing JWT_SECRET in .env")
    JWT_SECRET = "dev_insecure_change_me"
JWT_ALGO = os.getenv("JWT_ALGO", "HS256")
JWT_EXPIRES_MIN = int(os.getenv("JWT_EXPIRES_MIN", str(60 * 24)))   # 24h
JWT_LEEWAY_SEC = int(os.getenv("JWT_LEEWAY_SEC", "30"))

# bcrypt work factor; tests lower it to keep hashing fast
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

ADMIN_ROLE = "ADMIN"
USER_ROLE = "USER"

# === Asset host (Cloudinary) ===
CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME", "")
CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY", "")
CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET", "")
UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "portfolio_uploads")
UPLOAD_TIMEOUT_SECS = float(os.getenv("UPLOAD_TIMEOUT_SECS", "30"))
UPLOAD_REQUIRE_AUTH = os.getenv("UPLOAD_REQUIRE_AUTH", "true").strip().lower() == "true"

# === Public site ===
CONTACT_EMAIL = os.getenv("CONTACT_EMAIL", "default-contact@example.com")

# === CORS Settings ===
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "ALLOWED_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if origin.strip()
]

# === Database Configuration ===
def _resolve_sqlite_url(url: str) -> str:
    """Turn 'sqlite:///relative.db' into an absolute path under project root.
    Keep ':memory:' as-is. Ensure absolute paths use 4 slashes."""
    if not url.startswith("sqlite:"):
        return url
    if ":memory:" in url:
        return url
    prefix = "sqlite:///"
    if url.startswith(prefix):
        path = url[len(prefix):]
        if Path(path).is_absolute():
            return f"sqlite:////{Path(path).as_posix().lstrip('/')}"
        abs_path = (root / path).resolve()
        return f"sqlite:////{abs_path.as_posix().lstrip('/')}"
    return url

# Prefer env DATABASE_URL; if missing, persist to ./data/portfolio.db
_env_db = os.getenv("DATABASE_URL")
if _env_db:
    DATABASE_URL = _resolve_sqlite_url(_env_db)
else:
    data_dir = (root / "data").resolve()
    data_dir.mkdir(parents=True, exist_ok=True)
    sqlite_path = (data_dir / "portfolio.db").resolve()
    DATABASE_URL = f"sqlite:////{sqlite_path.as_posix().lstrip('/')}"

# Optional SQL echo for debugging (SQL_ECHO=true)
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

# === Seed ===
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
