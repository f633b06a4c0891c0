"""
Security tests for safedotenv.

Tests specifically for security-related scenarios:
- Malformed envelopes
- Wrong passphrases
- Per-file failure isolation in batches
"""

import pytest
import os
import tempfile

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from safedotenv.core_crypto.kdf import derive_key
from safedotenv.core_crypto.envelope import encrypt, decrypt
from safedotenv.core_crypto.errors import MalformedEnvelope
from safedotenv.files.file_crypto import Mode, encrypt_file, decrypt_file
from safedotenv.integration.batch import process


KEY = derive_key("right passphrase")
WRONG_KEY = derive_key("wrong passphrase")

skip_if_root = pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="permission checks do not apply to root"
)


def write(path, data):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)


def read(path):
    with open(path, "rb") as f:
        return f.read()


class TestMalformedEnvelope:
    """Invalid envelopes must be rejected, not decrypted."""

    @pytest.mark.parametrize("size", [0, 1, 15])
    def test_too_short(self, size):
        """Less than one IV is rejected."""
        with pytest.raises(MalformedEnvelope):
            decrypt(b"\x00" * size, KEY)

    @pytest.mark.parametrize("size", [17, 31, 16 + 20, 16 + 47])
    def test_misaligned(self, size):
        """Ciphertext that is not whole blocks is rejected."""
        with pytest.raises(MalformedEnvelope):
            decrypt(b"\x00" * size, KEY)

    def test_iv_only(self):
        """An IV with no ciphertext has no padding and is rejected."""
        with pytest.raises(MalformedEnvelope):
            decrypt(os.urandom(16), KEY)

    def test_truncated_envelope(self):
        """Dropping trailing bytes from a valid envelope is detected."""
        raw = encrypt(b"SECRET=1\n" * 10, KEY).to_bytes()
        with pytest.raises(MalformedEnvelope):
            decrypt(raw[:-5], KEY)

    def test_pad_length_exceeds_data(self):
        """A decrypted pad length larger than the plaintext is rejected."""
        iv = os.urandom(16)
        block = b"\x00" * 15 + bytes([200])
        encryptor = Cipher(algorithms.AES(KEY), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(block) + encryptor.finalize()

        with pytest.raises(MalformedEnvelope):
            decrypt(iv + ciphertext, KEY)

    def test_zero_pad_byte(self):
        """A pad byte of zero is invalid."""
        iv = os.urandom(16)
        encryptor = Cipher(algorithms.AES(KEY), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(b"A" * 15 + b"\x00") + encryptor.finalize()

        with pytest.raises(MalformedEnvelope):
            decrypt(iv + ciphertext, KEY)


class TestWrongKey:
    """Without an integrity tag, a wrong key is caught only probabilistically."""

    def test_wrong_key_never_returns_plaintext(self):
        """Wrong key either fails padding or yields different bytes."""
        plaintext = b"DB_PASSWORD=hunter2\n"
        raw = encrypt(plaintext, KEY).to_bytes()

        try:
            result = decrypt(raw, WRONG_KEY)
        except MalformedEnvelope:
            return
        assert result != plaintext

    def test_wrong_key_mostly_detected(self):
        """Most wrong-key decryptions fail the padding check."""
        failures = 0
        for _ in range(50):
            raw = encrypt(b"TOKEN=abcdef", KEY).to_bytes()
            try:
                decrypt(raw, WRONG_KEY)
            except MalformedEnvelope:
                failures += 1
        assert failures >= 40

    def test_ciphertext_differs_from_plaintext(self):
        """Plaintext does not appear in the envelope."""
        plaintext = b"AWS_SECRET_ACCESS_KEY=verysecretvalue"
        assert plaintext not in encrypt(plaintext, KEY).to_bytes()


class TestBatchIsolation:
    """One bad file must not affect the others."""

    def make_good(self, tmpdir):
        source = os.path.join(tmpdir, "good", ".env")
        write(source, b"GOOD=1\n")
        encrypted = encrypt_file(source, KEY)
        os.remove(source)
        return encrypted

    def test_corrupt_and_missing(self):
        """Corrupt and unreadable files fail; the good file is decrypted."""
        with tempfile.TemporaryDirectory() as tmpdir:
            good = self.make_good(tmpdir)
            corrupt = os.path.join(tmpdir, "corrupt", ".env-encrypted")
            write(corrupt, read(good)[:20])
            # A directory cannot be read as a file, even by root
            unreadable = os.path.join(tmpdir, "unreadable", ".env-encrypted")
            os.makedirs(unreadable)

            result = process([corrupt, good, unreadable], Mode.DECRYPT, KEY)

            assert len(result.failures) == 2
            failed = {o.path: o.error for o in result.failures}
            assert isinstance(failed[corrupt], MalformedEnvelope)
            assert isinstance(failed[unreadable], OSError)
            assert read(os.path.join(tmpdir, "good", ".env")) == b"GOOD=1\n"
            assert not os.path.exists(os.path.join(tmpdir, "corrupt", ".env"))

    @skip_if_root
    def test_permission_denied(self):
        """A permission-denied file fails alone."""
        with tempfile.TemporaryDirectory() as tmpdir:
            good = self.make_good(tmpdir)
            corrupt = os.path.join(tmpdir, "corrupt", ".env-encrypted")
            write(corrupt, read(good)[:20])
            denied = os.path.join(tmpdir, "denied", ".env-encrypted")
            write(denied, read(good))
            os.chmod(denied, 0)
            try:
                result = process([good, corrupt, denied], Mode.DECRYPT, KEY)
            finally:
                os.chmod(denied, 0o600)

            assert len(result.failures) == 2
            failed = {o.path: o.error for o in result.failures}
            assert isinstance(failed[denied], PermissionError)
            assert read(os.path.join(tmpdir, "good", ".env")) == b"GOOD=1\n"

    def test_wrong_suffix_isolated(self):
        """A path without the encrypted suffix fails without touching any file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            good = self.make_good(tmpdir)
            plain = os.path.join(tmpdir, "plain", ".env")
            write(plain, b"KEEP=1\n")

            result = process([good, plain], Mode.DECRYPT, KEY)

            assert [o.path for o in result.failures] == [plain]
            assert read(plain) == b"KEEP=1\n"

    def test_wrong_key_batch(self):
        """Decrypting with the wrong key never raises out of the batch."""
        with tempfile.TemporaryDirectory() as tmpdir:
            paths = []
            for i in range(5):
                source = os.path.join(tmpdir, str(i), ".env")
                write(source, b"X=1\n")
                paths.append(encrypt_file(source, KEY))

            result = process(paths, Mode.DECRYPT, WRONG_KEY)

            assert len(result.outcomes) == 5
            for outcome in result.failures:
                assert isinstance(outcome.error, MalformedEnvelope)

    def test_decrypt_file_direct(self):
        """decrypt_file raises for a truncated file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, ".env-encrypted")
            write(path, b"\x01" * 10)

            with pytest.raises(MalformedEnvelope):
                decrypt_file(path, KEY)
