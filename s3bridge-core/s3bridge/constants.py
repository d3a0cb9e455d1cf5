import s3bridge

# s3bridge version
VERSION = s3bridge.__version__

# hostname of the storage service, buckets are addressed as virtual hosts below it
DEFAULT_S3_ENDPOINT = "s3.amazonaws.com"

# default encoding used to convert strings to byte arrays
DEFAULT_ENCODING = "utf-8"

TRUE_STRINGS = ("1", "true", "True")

# log levels understood by S3BRIDGE_LOG
S3BRIDGE_LOG_TRACE = "trace"
LOG_LEVELS = ("trace", "debug", "info", "warn", "error", "warning")
TRACE_LOG_LEVELS = [S3BRIDGE_LOG_TRACE]

# environment variables holding default credentials for the CLI
ENV_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
ENV_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"

# request headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_DATE = "Date"

# response headers read by the response parsers
HEADER_ETAG = "etag"
HEADER_AMZ_DELETE_MARKER = "x-amz-delete-marker"
HEADER_AMZ_EXPIRATION = "x-amz-expiration"
HEADER_AMZ_REQUEST_ID = "x-amz-request-id"
HEADER_AMZ_RESTORE = "x-amz-restore"
HEADER_AMZ_SERVER_SIDE_ENCRYPTION = "x-amz-server-side-encryption"
HEADER_AMZ_VERSION_ID = "x-amz-version-id"
HEADER_AMZ_WEBSITE_REDIRECT_LOCATION = "x-amz-website-redirect-location"

# prefix of user-defined object metadata headers
HEADER_AMZ_META_PREFIX = "x-amz-meta-"
