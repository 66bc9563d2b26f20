import stripe

CURRENCY = "gbp"


def create_payment(amount: int, receipt_email: str, metadata: dict, api_key: str):
    return stripe.PaymentIntent.create(
        amount=amount,
        currency=CURRENCY,
        receipt_email=receipt_email,
        metadata=metadata,
        automatic_payment_methods={"enabled": True},
        api_key=api_key
    )


def retrieve_payment(payment_intent_id: str, api_key: str):
    return stripe.PaymentIntent.retrieve(payment_intent_id, api_key=api_key)
