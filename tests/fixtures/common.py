"""Common mock API responses and configuration."""

from jtl_connector.config import CONFIG_PREFIX

VALID_CONFIG = {
    CONFIG_PREFIX + "jtlBaseUrl": "https://wawi.example.com/api/eazybusiness/",
    CONFIG_PREFIX + "jtlApiKey": "Wawi 00000000-0000-0000-0000-000000000000",
    CONFIG_PREFIX + "jtlXAppId": "ShopConnector/2.1.0",
    CONFIG_PREFIX + "jtlXAppVersion": "2.1.0",
    CONFIG_PREFIX + "jtlTtl": 300,
    CONFIG_PREFIX + "cacheTtl": 120,
    CONFIG_PREFIX + "enableOnPdp": True,
}

BASE_URL = "https://wawi.example.com/api/eazybusiness"

ERROR_AUTH_401 = "Unauthorized: invalid Wawi API key"

ERROR_SERVER_500 = "Internal Server Error"
