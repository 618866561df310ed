"""
Authentication strategies for Cerberus.

AWSAuth authenticates with the IAM role of the running instance; TokenAuth
wraps a token obtained elsewhere. Both share the session refresh and
logout calls in cerberus_client.auth.session.
"""
from cerberus_client.auth.base import Auth, CachedTokenAuth
from cerberus_client.auth.session import session_refresh, session_logout
from cerberus_client.auth.decryptor import Decryptor, KMSDecryptor, LocalKeyDecryptor
from cerberus_client.auth.identity import (
    AssumedRoleProvider,
    IdentityResolver,
    InstanceMetadataClient,
    role_arn_from_instance_profile,
)
from cerberus_client.auth.challenge import authenticate
from cerberus_client.auth.aws import AWSAuth
from cerberus_client.auth.token import TokenAuth

# Exportación explícita de componentes públicos
__all__ = [
    'Auth',
    'CachedTokenAuth',
    'session_refresh',
    'session_logout',
    'Decryptor',
    'KMSDecryptor',
    'LocalKeyDecryptor',
    'AssumedRoleProvider',
    'IdentityResolver',
    'InstanceMetadataClient',
    'role_arn_from_instance_profile',
    'authenticate',
    'AWSAuth',
    'TokenAuth',
]
