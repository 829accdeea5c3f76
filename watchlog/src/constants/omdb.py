# OMDb reports a missing title as a logical error inside a 200 response
NOT_FOUND_ERROR = "Movie not found!"

NOT_AVAILABLE = "N/A"

MEDIA_TYPES = ("movie", "series", "episode")

WATCH_STATUSES = {
    "watching": "Watching",
    "completed": "Completed",
    "plan_to_watch": "Plan to Watch",
    "on_hold": "On Hold",
    "dropped": "Dropped",
}

DEFAULT_STATUS = "plan_to_watch"

# Headers the browser client sends on proxy calls
CORS_ALLOW_HEADERS = (
    "authorization, x-client-info, apikey, content-type, "
    "x-supabase-client-platform, x-supabase-client-platform-version, "
    "x-supabase-client-runtime, x-supabase-client-runtime-version"
)

CORS_ALLOW_METHODS = "GET, POST, PATCH, DELETE, OPTIONS"
