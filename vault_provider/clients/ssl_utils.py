"""SSL utilities for the Vault HTTP client."""

import os
import ssl
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import certifi

from vault_provider.constants import CERT_FILE_EXTENSIONS
from vault_provider.exceptions import ConfigurationError
from vault_provider.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TLSConfig:
    """TLS settings for the connection to Vault.

    Attributes:
        ca_cert_file: PEM file with CA certificates trusted for the server.
        ca_cert_dir: Directory of CA certificate files trusted for the server.
        client_cert: Client certificate file for mutual TLS.
        client_key: Private key file matching client_cert.
        insecure: Skip server certificate verification entirely.
    """

    ca_cert_file: str = ""
    ca_cert_dir: str = ""
    client_cert: str = ""
    client_key: str = ""
    insecure: bool = False


def resolve_client_auth(
    blocks: Sequence[Dict[str, Any]],
) -> Optional[Tuple[str, str]]:
    """Extract the mutual-TLS certificate/key pair from client_auth blocks.

    Args:
        blocks: The client_auth blocks of the provider configuration.

    Returns:
        Optional[Tuple[str, str]]: (cert_file, key_file), or None when no
            block was supplied.

    Raises:
        ConfigurationError: If more than one block is supplied, or a block
            names only one of the two files.
    """
    if len(blocks) > 1:
        raise ConfigurationError("client auth block may appear only once")
    if not blocks:
        return None

    cert_file = blocks[0].get("cert_file") or ""
    key_file = blocks[0].get("key_file") or ""
    if not cert_file and not key_file:
        return None
    if not cert_file or not key_file:
        raise ConfigurationError(
            "client auth requires both cert_file and key_file to be set"
        )
    return cert_file, key_file


def get_certificate_files(cert_dir: str) -> List[str]:
    """
    Get all certificate files from a directory.

    Args:
        cert_dir: Directory to search for certificate files

    Returns:
        List[str]: Sorted full paths to certificate files

    Raises:
        ConfigurationError: If the directory cannot be listed.
    """
    try:
        filenames = os.listdir(cert_dir)
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read CA certificate directory {cert_dir}: {e}"
        ) from e

    cert_files: List[str] = []
    for filename in sorted(filenames):
        if filename.lower().endswith(CERT_FILE_EXTENSIONS):
            cert_files.append(os.path.join(cert_dir, filename))
    return cert_files


def get_default_ca_bundle_path() -> Optional[str]:
    """First existing CA bundle: certifi, then the OpenSSL defaults.

    Returns None when none exists; the caller then falls back to
    SSLContext.load_default_certs().
    """
    verify_paths = ssl.get_default_verify_paths()
    candidates = (
        certifi.where(),
        verify_paths.cafile,
        verify_paths.openssl_cafile,
    )
    bundle = next((path for path in candidates if path and os.path.isfile(path)), None)
    if bundle is None:
        logger.debug("No CA bundle file found; using the platform trust store")
    return bundle


def _load_trust_pool(ssl_context: ssl.SSLContext, tls: TLSConfig) -> None:
    """Load the CA certificates named by tls into ssl_context.

    Custom CAs replace the system defaults rather than extending them.
    """
    ca_files: List[str] = []
    if tls.ca_cert_file:
        ca_files.append(tls.ca_cert_file)
    if tls.ca_cert_dir:
        dir_files = get_certificate_files(tls.ca_cert_dir)
        if not dir_files:
            raise ConfigurationError(
                f"No CA certificate files found in {tls.ca_cert_dir}"
            )
        ca_files.extend(dir_files)

    if not ca_files:
        default_bundle = get_default_ca_bundle_path()
        if default_bundle:
            ca_files.append(default_bundle)
        else:
            ssl_context.load_default_certs()
            return

    for ca_file in ca_files:
        try:
            ssl_context.load_verify_locations(cafile=ca_file)
        except (OSError, ValueError) as e:
            raise ConfigurationError(
                f"Failed to load CA certificate from {ca_file}: {e}"
            ) from e
        logger.debug(f"Loaded CA certificate from: {ca_file}")


def create_ssl_context(tls: TLSConfig) -> ssl.SSLContext:
    """
    Create the SSL context used for every connection to Vault.

    Args:
        tls: TLS settings from the provider configuration.

    Returns:
        ssl.SSLContext: Context with the configured trust pool and, when
            given, the client certificate for mutual TLS.

    Raises:
        ConfigurationError: If any certificate or key file cannot be read
            or parsed.

    Example:
        >>> import httpx
        >>> ssl_context = create_ssl_context(TLSConfig(ca_cert_file="/etc/vault/ca.pem"))
        >>> client = httpx.Client(verify=ssl_context)
    """
    ssl_context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    _load_trust_pool(ssl_context, tls)

    if tls.client_cert and tls.client_key:
        try:
            ssl_context.load_cert_chain(certfile=tls.client_cert, keyfile=tls.client_key)
        except OSError as e:
            raise ConfigurationError(
                f"Failed to load client certificate {tls.client_cert} "
                f"with key {tls.client_key}: {e}"
            ) from e
        logger.debug(f"Loaded client certificate from: {tls.client_cert}")

    if tls.insecure:
        logger.warning("TLS verification of the Vault server is disabled")
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_NONE

    return ssl_context
