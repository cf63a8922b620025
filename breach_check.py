"""Breach detection using the Pwned Passwords range API.

Uses the k-Anonymity model to check passwords without exposing them.
Only the first 5 characters of the SHA-1 hash are sent to the API; the
remaining 35 are matched locally against the returned candidates.
"""

import hashlib
import http.client
import logging
import re
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional, Union

from core.config import (
    PWNED_RANGE_URL,
    REQUEST_TIMEOUT,
    USER_AGENT,
    ADD_PADDING,
    DIGEST_LENGTH,
    PREFIX_LENGTH,
)


logger = logging.getLogger(__name__)

_DIGEST_RE = re.compile(r"^[0-9a-f]{%d}$" % DIGEST_LENGTH)
_ANY_CASE_DIGEST_RE = re.compile(r"^[0-9a-fA-F]{%d}$" % DIGEST_LENGTH)
_PREFIX_RE = re.compile(r"^[0-9a-fA-F]{%d}$" % PREFIX_LENGTH)


class BreachCheckError(Exception):
    """Base exception for breach lookup errors."""
    pass


class ValidationError(BreachCheckError):
    """Input is missing or malformed. Raised before any network traffic."""
    pass


class RangeQueryError(BreachCheckError):
    """The range request failed. Front ends show the message as-is."""
    pass


class NetworkError(RangeQueryError):
    """Request could not be built or sent."""
    pass


class RemoteError(RangeQueryError):
    """Range endpoint answered with a non-200 status."""

    def __init__(self, status: int, reason: str):
        self.status = status
        self.reason = reason
        super().__init__(f"HTTP {status}: {reason}")


class ReadError(RangeQueryError):
    """Response body could not be read or decoded."""
    pass


class RangeEntry(NamedTuple):
    """One ``SUFFIX:COUNT`` candidate. ``count`` is None when unparseable."""
    suffix: str
    count: Optional[int]


@dataclass
class LookupResult:
    """Outcome of a single breach lookup."""
    prefix: str
    found: bool = False
    count: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def hash_credential(credential: Union[str, bytes]) -> str:
    """Get the SHA-1 hex digest of a credential (40 lowercase chars).

    Strings are hashed as UTF-8. Bytes are hashed as-is, which lets the CLI
    pass raw argv bytes that are not valid UTF-8.

    Raises:
        ValidationError: If a string holds lone surrogates
    """
    if isinstance(credential, bytes):
        return hashlib.sha1(credential).hexdigest()
    try:
        data = credential.encode('utf-8')
    except UnicodeEncodeError as e:
        raise ValidationError("Password is not valid UTF-8") from e
    return hashlib.sha1(data).hexdigest()


def is_valid_digest(value: str) -> bool:
    """True if value is exactly 40 lowercase hex characters."""
    return isinstance(value, str) and bool(_DIGEST_RE.match(value))


def looks_like_digest(value: str) -> bool:
    """True if raw input already looks like a SHA-1 hash, in either case."""
    return bool(_ANY_CASE_DIGEST_RE.match(value))


def normalize_digest(value: str) -> str:
    """Lowercase and validate a user-supplied digest.

    Raises:
        ValidationError: If the value is not 40 hex characters
    """
    digest = value.lower()
    if not is_valid_digest(digest):
        raise ValidationError("Invalid SHA1 hash")
    return digest


def split_digest(digest: str) -> tuple[str, str]:
    """Split a digest into the public prefix and the private suffix.

    Returns:
        Tuple of (prefix, suffix) where prefix is the first 5 chars
        and suffix is the remaining 35 chars.
    """
    return digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]


def build_range_url(prefix: str, base_url: Optional[str] = None) -> str:
    """Embed a hash prefix into the range endpoint URL."""
    return f"{base_url or PWNED_RANGE_URL}{prefix}"


def parse_range_body(body: str) -> list[RangeEntry]:
    """Parse a range response body.

    Format is one ``SUFFIX:COUNT`` record per line. Lines without a colon
    are skipped. A count that is not a non-negative integer is logged and
    kept with ``count=None`` so it can never produce a match.
    """
    entries = []
    for line in body.split("\n"):
        line = line.rstrip("\r")
        if not line:
            continue

        suffix, sep, raw_count = line.partition(":")
        if not sep:
            logger.debug("Skipping range line without separator: %r", line)
            continue

        try:
            count: Optional[int] = int(raw_count.strip())
        except ValueError:
            count = None
        if count is not None and count < 0:
            count = None
        if count is None:
            logger.warning("Failed to parse breach count %r for suffix %s", raw_count, suffix)

        entries.append(RangeEntry(suffix.strip(), count))

    return entries


def query_range(
    prefix: str,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None
) -> list[RangeEntry]:
    """Fetch every candidate suffix sharing a hash prefix.

    Sends a single GET request; no retries.

    Args:
        prefix: First 5 hex characters of the SHA-1 digest
        base_url: Range endpoint, defaults to PWNED_RANGE_URL
        timeout: Request timeout in seconds, defaults to REQUEST_TIMEOUT

    Returns:
        Candidate entries in the order the service returned them

    Raises:
        ValidationError: If prefix is not 5 hex characters
        NetworkError: If the request cannot be built or sent
        RemoteError: If the endpoint does not answer 200
        ReadError: If the body cannot be read
    """
    if not isinstance(prefix, str) or not _PREFIX_RE.match(prefix):
        raise ValidationError(f"Invalid hash prefix: {prefix!r}")

    url = build_range_url(prefix, base_url)
    headers = {'User-Agent': USER_AGENT}
    if ADD_PADDING:
        headers['Add-Padding'] = 'true'

    try:
        request = urllib.request.Request(url, headers=headers, method="GET")
    except ValueError as e:
        raise NetworkError(f"failed to build request: {e}") from e

    try:
        response = urllib.request.urlopen(
            request, timeout=REQUEST_TIMEOUT if timeout is None else timeout
        )
    except urllib.error.HTTPError as e:
        # HTTPError is a URLError subclass, handle it first
        raise RemoteError(e.code, str(e.reason)) from e
    except urllib.error.URLError as e:
        raise NetworkError(f"failed to make request: {e.reason}") from e
    except (OSError, ValueError, http.client.HTTPException) as e:
        raise NetworkError(f"failed to make request: {e}") from e

    with response:
        status = getattr(response, "status", 200)
        if status != 200:
            raise RemoteError(status, str(getattr(response, "reason", "")))

        try:
            body = response.read().decode('utf-8')
        except (OSError, UnicodeDecodeError, http.client.HTTPException) as e:
            raise ReadError(f"failed to read response: {e}") from e

    return parse_range_body(body)


def match_suffix(digest: str, entries: Iterable[RangeEntry]) -> int:
    """Find the breach count for a digest among range candidates.

    Linear scan in the order received; the first entry whose suffix equals
    the digest's suffix (case-insensitively) wins. Entries without a valid
    count are ignored.

    Returns:
        Breach count, or 0 when no entry matches.
    """
    _, wanted = split_digest(digest.lower())
    for suffix, count in entries:
        if count is None:
            continue
        if suffix.lower() == wanted:
            return count
    return 0


def lookup_digest(
    digest: str,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None
) -> LookupResult:
    """Check a pre-computed SHA-1 digest against the breach corpus.

    Network failures are reported through ``LookupResult.error`` rather
    than raised, so front ends can show one message for every kind.

    Raises:
        ValidationError: If digest is not a valid SHA-1 hex string
    """
    digest = normalize_digest(digest)
    prefix, _ = split_digest(digest)

    try:
        entries = query_range(prefix, base_url=base_url, timeout=timeout)
    except RangeQueryError as e:
        logger.warning("Range lookup for prefix %s failed: %s", prefix, e)
        return LookupResult(prefix=prefix, error=str(e))

    count = match_suffix(digest, entries)
    return LookupResult(prefix=prefix, found=count > 0, count=count)


def lookup_password(
    password: str,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None
) -> LookupResult:
    """Check a password against the breach corpus.

    The password is hashed locally; only the hash prefix leaves the process.

    Raises:
        ValidationError: If password is empty
    """
    if not password:
        raise ValidationError("Password not provided")
    return lookup_digest(hash_credential(password), base_url=base_url, timeout=timeout)


def format_breach_warning(breach_count: int) -> str:
    """Format a warning message based on breach count."""
    if breach_count == 0:
        return ""
    elif breach_count < 10:
        return f"This password appeared in {breach_count} data breach(es). Consider using a different password."
    elif breach_count < 100:
        return f"WARNING: This password was found {breach_count} times in data breaches!"
    elif breach_count < 1000:
        return f"DANGER: This password was exposed {breach_count} times in breaches. Do NOT use it!"
    else:
        return f"CRITICAL: This password was found {breach_count:,} times in breaches. It is extremely compromised!"
