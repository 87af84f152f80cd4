"""Cloud session capability passed to prerequisite probes and step runs."""

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Any, Optional

logger = logging.getLogger(__name__)

# The account lookup is a local CLI call; it should never take this long
ACCOUNT_LOOKUP_TIMEOUT = 60


class Session(ABC):
    """An authenticated cloud session that steps rely on.

    Implementations should handle:
    - Checking whether a usable login exists
    - Describing the active identity for logs and reports
    - Supplying environment variables that pin steps to that identity
    """

    @abstractmethod
    def is_authenticated(self) -> bool:
        """Return True if an authenticated session is available."""
        pass

    @abstractmethod
    def describe(self) -> str:
        """Return a short description of the active identity."""
        pass

    @abstractmethod
    def environment(self) -> dict[str, str]:
        """Return environment variables to hand to step collaborators."""
        pass


class AzureCliSession(Session):
    """Session backed by the Azure CLI login (``az account show``).

    Example:
        session = AzureCliSession(subscription_id="0000-...")
        if session.is_authenticated():
            print(session.describe())
    """

    def __init__(self, subscription_id: Optional[str] = None, az_command: str = "az"):
        self._subscription_id = subscription_id
        self._az_command = az_command
        self._account: Optional[dict[str, Any]] = None

    def _load_account(self) -> Optional[dict[str, Any]]:
        """Query the active account, caching a successful lookup."""
        if self._account is not None:
            return self._account

        cmd = [self._az_command, "account", "show", "--output", "json"]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=ACCOUNT_LOOKUP_TIMEOUT,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Could not query Azure CLI account: %s", e)
            return None

        if result.returncode != 0:
            logger.debug("az account show failed: %s", result.stderr.strip())
            return None

        try:
            account = json.loads(result.stdout)
        except json.JSONDecodeError:
            logger.warning("Unexpected output from az account show")
            return None

        if not isinstance(account, dict):
            return None

        self._account = account
        return account

    def is_authenticated(self) -> bool:
        account = self._load_account()
        if account is None:
            return False
        if self._subscription_id and account.get("id") != self._subscription_id:
            logger.info(
                "Active subscription %s differs from configured %s; steps receive the configured one",
                account.get("id"),
                self._subscription_id,
            )
        return True

    def describe(self) -> str:
        account = self._load_account()
        if account is None:
            return "not logged in"
        user_info = account.get("user")
        user = user_info.get("name") if isinstance(user_info, dict) else None
        subscription = account.get("name") or account.get("id") or "unknown subscription"
        return f"{user or 'unknown user'} ({subscription})"

    def environment(self) -> dict[str, str]:
        subscription = self._subscription_id
        if not subscription:
            account = self._load_account() or {}
            subscription = account.get("id")
        return {"AZURE_SUBSCRIPTION_ID": subscription} if subscription else {}
