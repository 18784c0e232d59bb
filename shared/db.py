import os

from dotenv import load_dotenv
from supabase import Client, create_client

load_dotenv()

# Tables owned by the CMS (content, user_profiles) and by this system
CONTENT_TABLE = "content"
USER_PROFILES_TABLE = "user_profiles"
NOTIFICATION_RECORDS_TABLE = "notification_records"

_client: Client | None = None


def get_supabase_client() -> Client:
    """Get the shared Supabase client, creating it on first use."""
    global _client
    if _client is not None:
        return _client

    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_SERVICE_KEY")
    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")

    _client = create_client(url, key)
    return _client
