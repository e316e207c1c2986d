"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  2xxx: Tenant
  3xxx: Room
  4xxx: Payment
  5xxx: Balance
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/User ---

class UsernameExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Username already exists", 409)


class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Email already exists", 409)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid username or password", 401)


class AccountDisabledError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Account is disabled", 403)


class InvalidRefreshTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1005, "Refresh token is invalid or expired", 401)


# --- 2xxx: Tenant ---

class TenantNotFoundError(AppError):
    def __init__(self, tenant_id: str) -> None:
        super().__init__(2001, f"Tenant not found: {tenant_id}", 404)


class TenantMovedOutError(AppError):
    def __init__(self, tenant_id: str) -> None:
        super().__init__(2002, f"Tenant has moved out: {tenant_id}", 409)


# --- 3xxx: Room ---

class RoomNotFoundError(AppError):
    def __init__(self, room_id: str) -> None:
        super().__init__(3001, f"Room not found: {room_id}", 404)


class RoomNumberExistsError(AppError):
    def __init__(self, room_number: str) -> None:
        super().__init__(3002, f"Room number already exists: {room_number}", 409)


class RoomOccupiedError(AppError):
    def __init__(self, room_id: str) -> None:
        super().__init__(3003, f"Room is occupied by another tenant: {room_id}", 409)


class RoomNotAvailableError(AppError):
    def __init__(self, room_id: str, status: str) -> None:
        super().__init__(3004, f"Room {room_id} in status {status} cannot be assigned", 409)


class RoomInUseError(AppError):
    def __init__(self, room_id: str) -> None:
        super().__init__(3005, f"Room is referenced by tenants and cannot be deleted: {room_id}", 409)


class InvalidRoomStatusError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3006, f"Invalid room status change: {detail}", 422)


# --- 4xxx: Payment ---

class InvalidPaymentDateError(AppError):
    def __init__(self, payment_date: str) -> None:
        super().__init__(4001, f"Payment date cannot be in the future: {payment_date}", 422)


# --- 5xxx: Balance ---

class NoRoomAssignmentError(AppError):
    """Tenant has no room, so there is no rent to compare payments against."""

    def __init__(self, tenant_id: str) -> None:
        super().__init__(5001, f"Tenant has no room assignment: {tenant_id}", 400)


class BalanceInconsistentError(AppError):
    """Tenant points at a room that no longer exists. Details are logged, not returned."""

    def __init__(self) -> None:
        super().__init__(5002, "Balance data is inconsistent", 500)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class ServiceUnavailableError(AppError):
    def __init__(self) -> None:
        super().__init__(9003, "Service temporarily unavailable, please retry", 503)
