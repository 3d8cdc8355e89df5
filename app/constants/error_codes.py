from enum import Enum


class ErrorCode(str, Enum):
    # ---------------- GENERIC ----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # ---------------- TENANT CONTEXT ----------------
    CLIENT_CONTEXT_REQUIRED = "CLIENT_CONTEXT_REQUIRED"
    CLIENT_ACCESS_DENIED = "CLIENT_ACCESS_DENIED"

    # ---------------- AUTH ----------------
    AUTH_INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"
    AUTH_USER_INACTIVE = "AUTH_USER_INACTIVE"

    # ---------------- USERS ----------------
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_USERNAME_EXISTS = "USER_USERNAME_EXISTS"
    USER_ROLE_INVALID = "USER_ROLE_INVALID"
    USER_CLIENT_INVALID = "USER_CLIENT_INVALID"

    # ---------------- ROLES / PERMISSIONS ----------------
    ROLE_NOT_FOUND = "ROLE_NOT_FOUND"
    ROLE_NAME_EXISTS = "ROLE_NAME_EXISTS"
    ROLE_PROTECTED = "ROLE_PROTECTED"
    PERMISSION_NOT_FOUND = "PERMISSION_NOT_FOUND"
    PERMISSION_READ_ONLY = "PERMISSION_READ_ONLY"

    # ---------------- CLIENTS ----------------
    CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"
    CLIENT_NAME_EXISTS = "CLIENT_NAME_EXISTS"
    CLIENT_IN_USE = "CLIENT_IN_USE"

    # ---------------- LOCATIONS ----------------
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    LOCATION_IN_USE = "LOCATION_IN_USE"

    # ---------------- WAREHOUSES ----------------
    WAREHOUSE_NOT_FOUND = "WAREHOUSE_NOT_FOUND"

    # ---------------- EXCLUSIONS ----------------
    EXCLUSION_NOT_FOUND = "EXCLUSION_NOT_FOUND"
    EXCLUSION_EMPTY = "EXCLUSION_EMPTY"
    EXCLUSION_UNKNOWN_VALUE = "EXCLUSION_UNKNOWN_VALUE"
    EXCLUSION_RANGE_INVERTED = "EXCLUSION_RANGE_INVERTED"
    EXCLUSION_TO_WITHOUT_FROM = "EXCLUSION_TO_WITHOUT_FROM"

    # ---------------- PRODUCTS ----------------
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    PRODUCT_SKU_EXISTS = "PRODUCT_SKU_EXISTS"

    # ---------------- ORDERS ----------------
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
