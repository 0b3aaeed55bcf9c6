from typing import Optional
from supabase import create_client, Client, ClientOptions
from supabase_auth import SyncMemoryStorage, SyncSupportedStorage
from trip_planner.config import settings


class SupabaseClient:
    _client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """Shared anon client. Only used for identity calls that carry their own token."""
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def new_client(cls, flow_type: str = "implicit", storage: Optional[SyncSupportedStorage] = None) -> Client:
        """Throwaway client with no persisted session, for token refresh and the OAuth code flow."""
        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
            flow_type=flow_type,
            storage=storage or SyncMemoryStorage(),
        )
        return create_client(settings.supabase_url, settings.supabase_key, options=options)

    @classmethod
    def for_user(cls, access_token: str) -> Client:
        """Client whose table and rpc calls run as the given user, so row-level security applies."""
        client = cls.new_client()
        client.postgrest.auth(access_token)
        return client

    @classmethod
    def reset_client(cls):
        cls._client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()
