from enum import Enum


class ActivityCode(str, Enum):
    # ---------------- AUTH ----------------
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"

    # ---------------- USERS ----------------
    CREATE_USER = "CREATE_USER"
    UPDATE_USER = "UPDATE_USER"
    DELETE_USER = "DELETE_USER"

    # ---------------- ROLES / PERMISSIONS ----------------
    CREATE_ROLE = "CREATE_ROLE"
    UPDATE_ROLE = "UPDATE_ROLE"
    DELETE_ROLE = "DELETE_ROLE"
    ASSIGN_ROLE_PERMISSIONS = "ASSIGN_ROLE_PERMISSIONS"
    SYNC_PERMISSIONS = "SYNC_PERMISSIONS"

    # ---------------- CLIENTS ----------------
    CREATE_CLIENT = "CREATE_CLIENT"
    UPDATE_CLIENT = "UPDATE_CLIENT"
    DELETE_CLIENT = "DELETE_CLIENT"

    # ---------------- LOCATIONS ----------------
    CREATE_LOCATION = "CREATE_LOCATION"
    UPDATE_LOCATION = "UPDATE_LOCATION"
    DELETE_LOCATION = "DELETE_LOCATION"

    # ---------------- WAREHOUSES ----------------
    CREATE_WAREHOUSE = "CREATE_WAREHOUSE"
    UPDATE_WAREHOUSE = "UPDATE_WAREHOUSE"
    DELETE_WAREHOUSE = "DELETE_WAREHOUSE"
    CREATE_EXCLUSION = "CREATE_EXCLUSION"
    UPDATE_EXCLUSION = "UPDATE_EXCLUSION"
    DELETE_EXCLUSION = "DELETE_EXCLUSION"

    # ---------------- PRODUCTS ----------------
    CREATE_PRODUCT = "CREATE_PRODUCT"
    UPDATE_PRODUCT = "UPDATE_PRODUCT"
    DELETE_PRODUCT = "DELETE_PRODUCT"

    # ---------------- ORDERS ----------------
    CREATE_ORDER = "CREATE_ORDER"
    UPDATE_ORDER = "UPDATE_ORDER"
    DELETE_ORDER = "DELETE_ORDER"
