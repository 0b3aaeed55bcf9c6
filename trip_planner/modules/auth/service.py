from supabase_auth import SyncMemoryStorage
from supabase_auth.constants import STORAGE_KEY
from trip_planner.database.supabase_client import SupabaseClient
from fastapi import HTTPException
from typing import Tuple
import logging

logger = logging.getLogger(__name__)

CODE_VERIFIER_KEY = f"{STORAGE_KEY}-code-verifier"


class AuthService:
    """OAuth sign-in with the PKCE code flow.

    The verifier generated when the flow starts has to survive until the
    provider redirects back, so it is handed to the caller (and kept in a
    cookie) instead of living in a long-lived client.
    """

    def start_oauth(self, provider: str, redirect_to: str) -> Tuple[str, str]:
        """Return the provider URL to send the browser to and the PKCE code verifier"""
        storage = SyncMemoryStorage()
        client = SupabaseClient.new_client(flow_type="pkce", storage=storage)
        response = client.auth.sign_in_with_oauth({
            "provider": provider,
            "options": {"redirect_to": redirect_to}
        })
        code_verifier = storage.get_item(CODE_VERIFIER_KEY)
        if not response.url or not code_verifier:
            raise HTTPException(status_code=500, detail="Could not start sign-in")
        return response.url, code_verifier

    def exchange_code(self, code: str, code_verifier: str, redirect_to: str):
        """Trade the callback code for a session"""
        client = SupabaseClient.new_client(flow_type="pkce")
        response = client.auth.exchange_code_for_session({
            "auth_code": code,
            "code_verifier": code_verifier,
            "redirect_to": redirect_to
        })
        if not response.session:
            raise HTTPException(status_code=401, detail="Could not authenticate user")
        return response.session
