ADMIN_PREFIX = "/api/v1/admin"

LOGIN_URL = f"{ADMIN_PREFIX}/login"
LOGOUT_URL = f"{ADMIN_PREFIX}/logout"
ME_URL = f"{ADMIN_PREFIX}/me"
DASHBOARD_URL = f"{ADMIN_PREFIX}/dashboard"
GUESTS_URL = f"{ADMIN_PREFIX}/guests"
GUEST_DETAIL_URL = f"{ADMIN_PREFIX}/guests/{{guest_id}}"
IMPORT_GUESTS_URL = f"{ADMIN_PREFIX}/guests/import"
EXPORT_CSV_URL = f"{ADMIN_PREFIX}/export.csv"
