from supabase import create_client
from dotenv import load_dotenv
import os
import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)

load_dotenv()


# --- Supabase Client Logic ---
_supabase_client_instance = None

class SupabaseClient:
    def __init__(self):
        self._client = None
        # Defer initialization to first access

    def _get_or_init_client(self):
        if self._client is None:
            try:
                supabase_url = os.getenv('SUPABASE_URL')
                supabase_key = os.getenv('SUPABASE_SERVICE_KEY')

                if not supabase_url or not supabase_key:
                    raise ValueError("SUPABASE_URL or SUPABASE_SERVICE_KEY not found")

                logger.info("Initializing Supabase client...")
                self._client = create_client(supabase_url, supabase_key)
                logger.info("Successfully initialized Supabase client")
            except Exception as e:
                logger.error(f"Error initializing Supabase client: {str(e)}")
                self._client = None
                raise
        return self._client

    @property
    def client(self):
        """Get the Supabase client, initializing if needed."""
        return self._get_or_init_client()

    @contextmanager
    def db_connection(self):
        """Context manager for Supabase client usage"""
        try:
            yield self.client # Accessing .client ensures initialization
        except Exception as e:
            logger.error(f"Error in Supabase client operation: {str(e)}")
            raise

# Function to get the singleton instance
def _get_supabase_instance():
    global _supabase_client_instance
    if _supabase_client_instance is None:
        _supabase_client_instance = SupabaseClient()
    return _supabase_client_instance

def is_configured():
    """True when the Supabase credentials are present in the environment."""
    return bool(os.getenv('SUPABASE_URL') and os.getenv('SUPABASE_SERVICE_KEY'))

@contextmanager
def get_db():
    """Context manager for Supabase client operations (auth + table access)."""
    instance = _get_supabase_instance()
    with instance.db_connection() as client:
        yield client
