"""Custom exceptions for the supermarket billing application."""


class BillingError(Exception):
    """Base exception for all application errors."""
    error = 'InternalError'

    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['error'] = self.error
        rv['status'] = 'error'
        return rv


class InvalidRequestError(BillingError):
    """Malformed or missing input; the caller must change the request."""
    error = 'InvalidRequest'

    def __init__(self, message, payload=None):
        super().__init__(message, 400, payload)


class NotFoundError(BillingError):
    """Exception raised when a resource is not found."""
    error = 'NotFound'

    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)


class ProductNotFoundError(NotFoundError):
    """Raised when a referenced product does not exist or is not for sale."""
    error = 'ProductNotFound'

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(
            f"Product with ID {product_id} not found.",
            payload={'product_id': product_id}
        )


class InsufficientStockError(BillingError):
    """Raised when an operation fails due to lack of stock."""
    error = 'InsufficientStock'

    def __init__(self, product_id, available, requested, product_name=None):
        self.product_id = product_id
        self.available = available
        self.requested = requested
        label = product_name or f"product {product_id}"
        message = f"Insufficient stock for {label}. Available: {available}, Requested: {requested}"
        super().__init__(
            message,
            status_code=409,
            payload={'product_id': product_id, 'available': available, 'requested': requested}
        )


class TransactionFailure(BillingError):
    """Store-level conflict or infrastructure error. Nothing was committed, so retrying is safe."""
    error = 'TransactionFailure'

    def __init__(self, message="Transaction failed", payload=None):
        super().__init__(message, 500, payload)
