"""Application use cases."""

from idistr.application.use_cases.manage_cart import (
    ManageCartUseCase,
    cart_to_response,
    line_to_response,
)
from idistr.application.use_cases.start_session import StartSessionResult, StartSessionUseCase
from idistr.application.use_cases.submit_order import SubmitOrderResult, SubmitOrderUseCase

__all__ = [
    "ManageCartUseCase",
    "cart_to_response",
    "line_to_response",
    "StartSessionResult",
    "StartSessionUseCase",
    "SubmitOrderResult",
    "SubmitOrderUseCase",
]
