from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from bigq.bigquery.backend import BigQueryBackend
from common.config.env import get_env_str

BIGQUERY_SCOPE = "https://www.googleapis.com/auth/bigquery"


@dataclass(frozen=True)
class ClientOptions:
    """How to build the google-cloud-bigquery client.

    With neither ``credentials_file`` nor ``credentials_info`` set, the client
    falls back to application default credentials.
    """

    project: Optional[str] = None
    location: Optional[str] = None
    credentials_file: Optional[str] = None
    credentials_info: Optional[Dict[str, Any]] = None
    scopes: Tuple[str, ...] = (BIGQUERY_SCOPE,)

    @classmethod
    def from_env(cls) -> "ClientOptions":
        """Load client options from environment variables."""
        return cls(
            project=get_env_str("BIGQUERY_PROJECT") or None,
            location=get_env_str("BIGQUERY_LOCATION") or None,
            credentials_file=get_env_str("GOOGLE_APPLICATION_CREDENTIALS") or None,
        )

    def credentials(self):
        """Return service-account credentials, or None for application defaults."""
        if self.credentials_file and self.credentials_info:
            raise ValueError("Set only one of credentials_file and credentials_info.")
        if not (self.credentials_file or self.credentials_info):
            return None

        from google.oauth2 import service_account

        if self.credentials_info:
            return service_account.Credentials.from_service_account_info(
                dict(self.credentials_info), scopes=list(self.scopes)
            )
        return service_account.Credentials.from_service_account_file(
            self.credentials_file, scopes=list(self.scopes)
        )

    def client(self):
        """Build a ``google.cloud.bigquery.Client``."""
        from google.cloud import bigquery

        return bigquery.Client(
            project=self.project,
            credentials=self.credentials(),
            location=self.location,
        )

    def backend(self) -> BigQueryBackend:
        return BigQueryBackend(self.client())
