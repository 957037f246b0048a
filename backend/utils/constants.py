# Error Messages
INVALID_NAME_OR_PASSWORD = "Invalid credentials"
INVALID_AUTH_CREDENTIALS = "Invalid authentication credentials"
USER_NOT_FOUND = "User not found"
ADMIN_ACCESS_REQUIRED = "Forbidden: Admins only"
TICKET_EDIT_FORBIDDEN = (
    "Forbidden: only admins, maintenance staff or the ticket's creator "
    "may update this ticket"
)
OWN_NOTIFICATIONS_ONLY = (
    "Forbidden: You can only access your own notifications"
)
NOTIFICATION_NOT_OWNED = "Forbidden: You cannot modify this notification"
CANNOT_DELETE_OWN_ACCOUNT = "Cannot delete your own account"
INTERNAL_ERROR = "Internal server error"

# Ticket validation
TICKET_REQUIRED_FIELDS = "Department, category and status are required."
NOTIFICATION_MESSAGE_REQUIRED = "Notification message is required."

# Conflicts
USER_NAME_TAKEN = "User with this name already exists"
DEPARTMENT_NAME_TAKEN = "Department with this name already exists"
SUB_CATEGORY_NAME_TAKEN = (
    "Sub-category with this name already exists for the selected category"
)
ASSET_ALREADY_EXISTS = "Asset with this item code or serial number already exists"

# Authentication
WWW_AUTHENTICATE_HEADER = "Bearer"

# Largest id a SQLite INTEGER column can hold
MAX_ID = 2**63 - 1
MIN_ID = -(2**63)
