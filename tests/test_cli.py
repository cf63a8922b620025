"""Tests for the breach check CLI."""

import hashlib
import os
import urllib.error

import pytest

from cli.checker import EXIT_LOOKUP_FAILED, EXIT_OK, EXIT_USAGE, main
from tests.conftest import PASSWORD_DIGEST, PASSWORD_SUFFIX


class TestCheckerCli:
    """Test CLI flows end to end with a stubbed range API."""

    def test_found(self, fake_urlopen, capsys):
        fake_urlopen.respond(f"{PASSWORD_SUFFIX}:42\r\n")
        assert main(["-p", "password"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "prefix: 5baa6" in out
        assert "found in 42 breach(s)" in out
        assert "WARNING" in out

    def test_not_found(self, fake_urlopen, capsys):
        fake_urlopen.respond("0018A45C4D1DEF81644B54AB7F969B88D65:3\r\n")
        assert main(["--password", "password"]) == EXIT_OK
        assert "not found in any known breach" in capsys.readouterr().out

    def test_missing_password(self, fake_urlopen, capsys):
        assert main([]) == EXIT_USAGE
        assert "Password not provided" in capsys.readouterr().out
        assert fake_urlopen.requests == []

    def test_lookup_failure_exit_status(self, fake_urlopen, capsys):
        fake_urlopen.error = urllib.error.URLError("unreachable")
        assert main(["-p", "password"]) == EXIT_LOOKUP_FAILED
        assert "Error checking hash" in capsys.readouterr().out

    def test_hash_option(self, fake_urlopen, capsys):
        fake_urlopen.respond(f"{PASSWORD_SUFFIX}:1")
        assert main(["--hash", PASSWORD_DIGEST.upper()]) == EXIT_OK
        assert "found in 1 breach(s)" in capsys.readouterr().out

    def test_invalid_hash(self, fake_urlopen, capsys):
        assert main(["--hash", "abc"]) == EXIT_USAGE
        assert "Invalid SHA1 hash" in capsys.readouterr().out

    def test_hash_with_surrounding_whitespace(self, fake_urlopen, capsys):
        assert main(["--hash", " " + PASSWORD_DIGEST]) == EXIT_USAGE
        assert "Invalid SHA1 hash" in capsys.readouterr().out
        assert fake_urlopen.requests == []

    def test_non_utf8_password_bytes(self, fake_urlopen, capsys):
        """Undecodable argv bytes are hashed as the shell passed them."""
        raw = b"caf\xe9"
        fake_urlopen.respond("")
        assert main(["-p", os.fsdecode(raw)]) == EXIT_OK
        prefix = hashlib.sha1(raw).hexdigest()[:5]
        assert fake_urlopen.requests[0].full_url.endswith("/" + prefix)
        assert f"prefix: {prefix}" in capsys.readouterr().out

    @pytest.mark.parametrize("value", ["password", PASSWORD_DIGEST])
    def test_auto_accepts_password_or_hash(self, fake_urlopen, capsys, value):
        fake_urlopen.respond(f"{PASSWORD_SUFFIX}:3")
        assert main(["--auto", value]) == EXIT_OK
        assert fake_urlopen.requests[0].full_url.endswith("/5baa6")

    def test_password_and_hash_exclusive(self):
        with pytest.raises(SystemExit):
            main(["-p", "password", "--hash", PASSWORD_DIGEST])
