from app.constants.activity_codes import ActivityCode


ACTIVITY_TEMPLATES = {
    # ---------------- AUTH ----------------
    ActivityCode.LOGIN:
        "{actor_role} ({actor_name}) logged in",

    ActivityCode.LOGOUT:
        "{actor_role} ({actor_name}) logged out",

    # ---------------- USERS ----------------
    ActivityCode.CREATE_USER:
        "{actor_role} ({actor_name}) created user {target_name}",

    ActivityCode.UPDATE_USER:
        "{actor_role} ({actor_name}) updated user {target_name}: {changes}",

    ActivityCode.DELETE_USER:
        "{actor_role} ({actor_name}) deleted user {target_name}",

    # ---------------- ROLES / PERMISSIONS ----------------
    ActivityCode.CREATE_ROLE:
        "{actor_role} ({actor_name}) created role {target_name} ({scope})",

    ActivityCode.UPDATE_ROLE:
        "{actor_role} ({actor_name}) updated role {target_name}: {changes}",

    ActivityCode.DELETE_ROLE:
        "{actor_role} ({actor_name}) deleted role {target_name}",

    ActivityCode.ASSIGN_ROLE_PERMISSIONS:
        "{actor_role} ({actor_name}) assigned {count} permissions to role {target_name}",

    ActivityCode.SYNC_PERMISSIONS:
        "{actor_role} ({actor_name}) synced {count} permissions",

    # ---------------- CLIENTS ----------------
    ActivityCode.CREATE_CLIENT:
        "{actor_role} ({actor_name}) created client {target_name}",

    ActivityCode.UPDATE_CLIENT:
        "{actor_role} ({actor_name}) updated client {target_name}: {changes}",

    ActivityCode.DELETE_CLIENT:
        "{actor_role} ({actor_name}) deleted client {target_name}",

    # ---------------- LOCATIONS ----------------
    ActivityCode.CREATE_LOCATION:
        "{actor_role} ({actor_name}) created location {target_name}",

    ActivityCode.UPDATE_LOCATION:
        "{actor_role} ({actor_name}) updated location {target_name}: {changes}",

    ActivityCode.DELETE_LOCATION:
        "{actor_role} ({actor_name}) deleted location {target_name}",

    # ---------------- WAREHOUSES ----------------
    ActivityCode.CREATE_WAREHOUSE:
        "{actor_role} ({actor_name}) created warehouse {target_name}",

    ActivityCode.UPDATE_WAREHOUSE:
        "{actor_role} ({actor_name}) updated warehouse {target_name}: {changes}",

    ActivityCode.DELETE_WAREHOUSE:
        "{actor_role} ({actor_name}) deleted warehouse {target_name} "
        "and {exclusion_count} exclusions",

    ActivityCode.CREATE_EXCLUSION:
        "{actor_role} ({actor_name}) excluded {ranges} in warehouse {target_name}",

    ActivityCode.UPDATE_EXCLUSION:
        "{actor_role} ({actor_name}) changed exclusion #{exclusion_id} "
        "in warehouse {target_name} to {ranges}",

    ActivityCode.DELETE_EXCLUSION:
        "{actor_role} ({actor_name}) removed exclusion #{exclusion_id} "
        "from warehouse {target_name}",

    # ---------------- PRODUCTS ----------------
    ActivityCode.CREATE_PRODUCT:
        "{actor_role} ({actor_name}) created product {target_name} ({sku})",

    ActivityCode.UPDATE_PRODUCT:
        "{actor_role} ({actor_name}) updated product {target_name}: {changes}",

    ActivityCode.DELETE_PRODUCT:
        "{actor_role} ({actor_name}) deleted product {target_name} ({sku})",

    # ---------------- ORDERS ----------------
    ActivityCode.CREATE_ORDER:
        "{actor_role} ({actor_name}) created order #{target_id}",

    ActivityCode.UPDATE_ORDER:
        "{actor_role} ({actor_name}) updated order #{target_id}: {changes}",

    ActivityCode.DELETE_ORDER:
        "{actor_role} ({actor_name}) deleted order #{target_id}",
}
