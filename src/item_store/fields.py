"""Well-known field names written on managed items."""

EXTERNAL_ID = "ExternalId"

# Media stream fields
BLOB = "Blob"
EXTENSION = "Extension"
SIZE = "Size"
MIME_TYPE = "Mime Type"
ALT = "Alt"

# Standard fields
BUCKETABLE = "__Bucketable"
CREATED = "__Created"
CREATED_BY = "__Created by"
