import logging
import requests

from app.config import Settings
from app.errors import PersistenceError
from app.models import PurchaseRecord

logger = logging.getLogger(__name__)

PURCHASES_TABLE = "purchases"


def record_purchase(settings: Settings, record: PurchaseRecord) -> None:
    """Insert a purchase row through the Supabase REST interface."""
    url = f"{settings.supabase_url}/rest/v1/{PURCHASES_TABLE}"
    headers = {
        "apikey": settings.supabase_key,
        "Authorization": "Bearer " + settings.supabase_key,
        "Content-Type": "application/json",
        "Prefer": "return=minimal",
    }

    try:
        response = requests.post(url, json=record.model_dump(), headers=headers)
    except requests.RequestException as e:
        raise PersistenceError(f"Error calling data store: {e}") from e

    if not response.ok:
        raise PersistenceError(f"{response.status_code} {response.text}")

    logger.debug("[supabase-insert] stored purchase for %s", record.payment_intent_id)
