"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Header names, in canonical form.

CONTENT_TYPE = "Content-Type"
CONTENT_LENGTH = "Content-Length"
REPLY_TEXT = "Reply-Text"

# Content types.

AUTH_REQUEST = "auth/request"
COMMAND_REPLY = "command/reply"
API_RESPONSE = "api/response"
EVENT_PLAIN = "text/event-plain"
EVENT_JSON = "text/event-json"

# Reply-Text success markers.

OK = "+OK"
OK_ACCEPTED = "+OK accepted"

# Field names in decoded messages.

BODY = "body"
EVENT_BODY = "_body"
EVENT_NAME = "Event-Name"

# Event formats accepted by the 'event' command.

FORMATS = ("plain", "json")
