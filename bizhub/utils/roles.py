ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLE_BUSINESS_OWNER = "business_owner"
ROLE_CLIENT = "client"

USER_ROLES = (ROLE_USER, ROLE_ADMIN, ROLE_BUSINESS_OWNER)
ALL_ROLES = USER_ROLES + (ROLE_CLIENT,)
