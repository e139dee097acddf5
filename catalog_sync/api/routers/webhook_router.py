import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from catalog_sync.db.record_store import RecordStore, get_record_store
from catalog_sync.services.webhooks import WebhookDelivery, handle_delivery

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/webhooks/shopify")
async def shopify_webhook(request: Request, records: RecordStore = Depends(get_record_store)):
    """
    Receive a Shopify order webhook.

    The raw body is read before any parsing so the HMAC is computed over the
    exact bytes Shopify signed.
    """
    delivery = WebhookDelivery(
        raw_body=await request.body(),
        hmac_header=request.headers.get("X-Shopify-Hmac-Sha256"),
        topic=request.headers.get("X-Shopify-Topic"),
        shop_domain=request.headers.get("X-Shopify-Shop-Domain"),
    )
    status_code, body = await handle_delivery(records, delivery)
    return JSONResponse(status_code=status_code, content=body)
