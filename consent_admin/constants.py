CONSENT_ADMIN_VERSION = "1.2.0"

# Attribute used as the user identifier when the identity source does not override it
DEFAULT_USERID_ATTRIBUTE = "eduPersonPrincipalName"

# Metadata set names used when deriving source and destination identifiers
IDP_HOSTED_SET = "saml20-idp-hosted"
IDP_REMOTE_SET = "saml20-idp-remote"
SP_REMOTE_SET = "saml20-sp-remote"

# Auth context key present when the user came in through a remote identity source
BRIDGED_IDP_KEY = "saml:sp:IdP"

# Placeholder salt shipped in sample configs; refused at load time
PLACEHOLDER_SECRET_SALT = "defaultsecretsalt"

CONSENT_ADMIN_HEADER = "Consent Administration"
