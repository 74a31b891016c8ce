"""
Omise API Client - Load Layer

Card tokenisation and charge creation against the Omise payment gateway.
Pure I/O: returns gateway responses, raises on gateway or transport errors.
"""

import logging
import time
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from tamboon.coreutils.env import env_get
from tamboon.transformation.schemas import Donation

logger = logging.getLogger(__name__)

# API Endpoints
VAULT_URL = "https://vault.omise.co"
API_URL = "https://api.omise.co"

REQUEST_TIMEOUT = 30


class OmiseError(Exception):
    """Error object returned by the Omise API"""

    def __init__(self, code: str, message: str, status_code: Optional[int] = None):
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(f"{code}: {message}")


class OmiseClient:
    """Minimal Omise client for tokens and charges"""

    def __init__(
        self,
        public_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        request_delay: float = 0.0,
        session: Optional[requests.Session] = None,
    ):
        self.public_key = public_key or env_get("OMISE_PUBLIC_KEY")
        self.secret_key = secret_key or env_get("OMISE_SECRET_KEY")
        if not self.public_key:
            raise ValueError("OMISE_PUBLIC_KEY environment variable is not set")
        if not self.secret_key:
            raise ValueError("OMISE_SECRET_KEY environment variable is not set")

        self.request_delay = request_delay
        self.session = session or self._create_session()
        self._last_request_time: Optional[float] = None

    def _create_session(self) -> requests.Session:
        """Create HTTP session with retry strategy"""
        session = requests.Session()

        # POST is not in urllib3's default allowed_methods, so charges are never retried
        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update(
            {"User-Agent": "tamboon/0.1", "Accept": "application/json"}
        )

        return session

    def _throttle(self):
        if self.request_delay <= 0 or self._last_request_time is None:
            return
        elapsed = time.time() - self._last_request_time
        if elapsed < self.request_delay:
            time.sleep(self.request_delay - elapsed)

    def _post(self, url: str, key: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """POST form data with basic auth and decode the JSON body"""
        self._throttle()
        try:
            response = self.session.post(
                url, data=data, auth=(key, ""), timeout=REQUEST_TIMEOUT
            )
        finally:
            self._last_request_time = time.time()

        try:
            body = response.json()
        except ValueError:
            response.raise_for_status()
            raise requests.RequestException(
                f"Invalid JSON response from {url}: status={response.status_code}"
            )

        if body.get("object") == "error":
            raise OmiseError(
                body.get("code", "unknown"),
                body.get("message", ""),
                response.status_code,
            )

        response.raise_for_status()
        return body

    def create_token(self, donation: Donation) -> str:
        """
        Tokenise the donor's card

        Args:
            donation: Donation carrying the card details

        Returns:
            str: Token id (tokn_...)
        """
        logger.debug(f"Creating token for card {donation.masked_card_number}")
        token = self._post(
            f"{VAULT_URL}/tokens",
            self.public_key,
            {
                "card[name]": donation.name,
                "card[number]": donation.card_number,
                "card[expiration_month]": donation.expiration_month,
                "card[expiration_year]": donation.expiration_year,
                "card[security_code]": donation.cvv,
            },
        )
        return token["id"]

    def create_charge(
        self, amount: int, currency: str, token_id: str
    ) -> Dict[str, Any]:
        """
        Charge a tokenised card

        Args:
            amount: Amount in minor currency units
            currency: ISO currency code (e.g. "thb")
            token_id: Card token from create_token

        Returns:
            Dict: Charge object from the API
        """
        charge = self._post(
            f"{API_URL}/charges",
            self.secret_key,
            {"amount": amount, "currency": currency, "card": token_id},
        )

        # Declined cards come back as a charge object, not an error object
        if charge.get("status") == "failed":
            raise OmiseError(
                charge.get("failure_code") or "failed_charge",
                charge.get("failure_message") or "charge failed",
            )
        return charge

    def charge_donation(
        self, donation: Donation, currency: str = "thb"
    ) -> Dict[str, Any]:
        """Tokenise the card and charge the donation amount"""
        token_id = self.create_token(donation)
        charge = self.create_charge(donation.amount_subunits, currency, token_id)
        logger.info(
            f"Charged {donation.name}: {donation.amount_subunits} {currency} ({charge.get('id')})"
        )
        return charge
