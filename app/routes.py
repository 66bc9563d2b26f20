import json
import logging
import uuid
from typing import Type
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.concurrency import run_in_threadpool

from app.config import Settings, get_settings
from app.database import record_purchase
from app.email_service import build_access_link, send_access_email
from app.errors import (
    ClientInputError,
    NotificationError,
    PaymentNotConfirmedError,
    PersistenceError,
)
from app.models import CreateIntentRequest, PaymentSuccessRequest, PurchaseRecord
from app.stripe_service import create_payment, retrieve_payment

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

CREATE_REQUIRED = "Email and name are required."
SUCCESS_REQUIRED = "paymentIntentId and email are required."


async def read_json(request: Request) -> dict:
    body = await request.body()
    if not body:
        return {}
    data = json.loads(body)
    # Anything other than an object carries no usable fields
    return data if isinstance(data, dict) else {}


def parse_payload(model: Type[BaseModel], data: dict, required_message: str):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ClientInputError(required_message) from e


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def create_intent(payload: CreateIntentRequest, settings: Settings) -> str:
    intent = create_payment(
        amount=payload.amount,
        receipt_email=payload.email,
        metadata={
            "customer_name": payload.name,
            "customer_email": payload.email,
            "product": payload.product,
        },
        api_key=settings.stripe_secret_key
    )
    return intent.client_secret


def finalize_purchase(payload: PaymentSuccessRequest, settings: Settings) -> str:
    """Verify the intent, mint a token, log the sale and email the buyer.

    Returns the access token. Raises PaymentNotConfirmedError before any side
    effect when the intent has not succeeded, and NotificationError when the
    access email could not be sent. Persistence failures are logged only.
    """
    intent = retrieve_payment(payload.payment_intent_id, api_key=settings.stripe_secret_key)
    if intent.status != "succeeded":
        raise PaymentNotConfirmedError(intent.status)

    access_token = str(uuid.uuid4())

    if settings.store_configured:
        record = PurchaseRecord(
            email=payload.email,
            name=payload.name or None,
            payment_intent_id=payload.payment_intent_id,
            product=payload.product,
            access_token=access_token,
        )
        try:
            record_purchase(settings, record)
        except PersistenceError as e:
            logger.error("[supabase-insert] %s", e.message)

    access_link = build_access_link(settings.app_url, access_token)
    send_access_email(settings, payload.email, payload.name, access_link)

    return access_token


@router.api_route("/create-payment-intent", methods=["POST", "OPTIONS"])
async def create_payment_intent(request: Request, settings: Settings = Depends(get_settings)):
    if request.method == "OPTIONS":
        return Response(status_code=200)

    try:
        payload = parse_payload(CreateIntentRequest, await read_json(request), CREATE_REQUIRED)
        if not payload.email or not payload.name:
            raise ClientInputError(CREATE_REQUIRED)

        client_secret = await run_in_threadpool(create_intent, payload, settings)
    except ClientInputError as e:
        logger.info("[create-payment-intent] rejected: %s", e.message)
        return error_response(e.message, e.status_code)
    except Exception as e:
        logger.exception("[create-payment-intent] %s", e)
        return error_response("Unable to create payment. Please try again.", 500)

    return {"clientSecret": client_secret}


@router.api_route("/payment-success", methods=["POST", "OPTIONS"])
async def payment_success(request: Request, settings: Settings = Depends(get_settings)):
    if request.method == "OPTIONS":
        return Response(status_code=200)

    try:
        payload = parse_payload(PaymentSuccessRequest, await read_json(request), SUCCESS_REQUIRED)
        if not payload.payment_intent_id or not payload.email:
            raise ClientInputError(SUCCESS_REQUIRED)

        access_token = await run_in_threadpool(finalize_purchase, payload, settings)
    except (ClientInputError, PaymentNotConfirmedError) as e:
        logger.info("[payment-success] rejected: %s", e.message)
        return error_response(e.message, e.status_code)
    except NotificationError as e:
        logger.error("[resend-email] %s", e.message)
        return error_response(
            "Payment succeeded but email failed. Contact " + settings.support_email,
            e.status_code
        )
    except Exception as e:
        logger.exception("[payment-success] %s", e)
        return error_response("Internal error. Contact " + settings.support_email, 500)

    return {"success": True, "accessToken": access_token}
