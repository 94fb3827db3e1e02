"""
Errors raised by the service layer.

Views translate these into HTTP responses; services never build responses
themselves. ``PartialUpdateWarning`` is not raised: it rides along on a
successful payment confirmation whose booking record could not be advanced.
"""


class ServiceError(Exception):
    default_detail = "The request could not be completed."

    def __init__(self, detail=None):
        self.detail = detail if detail is not None else self.default_detail
        super().__init__(str(self.detail))


class ValidationError(ServiceError):
    default_detail = "Invalid input."


class NotFoundError(ServiceError):
    default_detail = "Not found."


class GatewayError(ServiceError):
    default_detail = "The payment processor request failed."


class ImageUploadError(GatewayError):
    default_detail = "Failed to upload image."


class PaymentNotCompletedError(ServiceError):
    default_detail = "Payment not completed."

    def __init__(self, payment_status: str, detail=None):
        self.payment_status = payment_status
        super().__init__(detail)


class PartialUpdateWarning(UserWarning):
    """Settlement was recorded in the ledger but the booking was not advanced."""
