# Infrastructure clients
from clients.vault_client import (
    VaultClient,
    VaultError,
    get_appwrite_config,
)
from clients.appwrite_client import (
    AppwriteClient,
    RemoteServiceError,
    UNIQUE_ID,
    query_equal,
    query_order_desc,
    query_limit,
    query_offset,
)
