"""
Errors raised by the order workflow.

They are DRF `APIException` subclasses, so a view can let them propagate and the framework turns
them into a response carrying the status code, the message (`detail`) and a stable `code`.
Code that is not request-driven (shell, management commands, tests) catches them like any other
exception.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class OrderWorkflowError(APIException):
    """Base class for every error of the order and commission workflow."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The order could not be processed.'
    default_code = 'order_error'


class OrderNotFound(OrderWorkflowError):
    """
    The lookup (id, not deleted and, where it applies, visible to the caller) matched nothing.
    The message deliberately does not say which of those conditions failed.
    """
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Order not found.'
    default_code = 'order_not_found'


class OrderAlreadyAssigned(OrderWorkflowError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'This order has already been assigned.'
    default_code = 'order_already_assigned'


class NotOrderOwner(OrderWorkflowError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'This order is not assigned to you.'
    default_code = 'not_order_owner'


class InvalidCommissionRate(OrderWorkflowError):
    default_detail = 'Commission rate must be between 0 and 100.'
    default_code = 'invalid_commission_rate'


class InvalidAmount(OrderWorkflowError):
    default_detail = 'Order amount must be a positive number.'
    default_code = 'invalid_amount'


class InvalidStatus(OrderWorkflowError):
    default_detail = 'Unknown order status.'
    default_code = 'invalid_status'


class IllegalTransition(OrderWorkflowError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'This status change is not allowed.'
    default_code = 'illegal_transition'


class InvalidAssignee(OrderWorkflowError):
    default_detail = 'Orders can only be assigned to active agents or administrators.'
    default_code = 'invalid_assignee'


class DuplicatePaymentSession(OrderWorkflowError):
    """A second order was requested for a payment session that already produced one."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'An order already exists for this payment session.'
    default_code = 'duplicate_payment_session'
