# test.py
# Unit test

import unittest
import hashlib
import warnings

from constants import MASK64, SHA1_INITIAL_HASH_VALUES
from functions import choice, majority, parity, rotl, round_function
from main import HASH, pad, sha1
from utils import EngineFinalizedError


class SecureHashStandardTest(unittest.TestCase):
    def setUp(self):
        self.test_vectors = [
            b"",
            b"a",
            b"abc",
            b"message digest",
            b"abcdefghijklmnopqrstuvwxyz",
            b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
            b"1234567890" * 8,
            bytes(range(256)) * 3,
        ]

    def test_sha1(self):
        for msg in self.test_vectors:
            expected = hashlib.sha1(msg).hexdigest()
            result = sha1(msg).hexdigest()
            self.assertEqual(result, expected, f"Failed for message: {msg}")

    def test_known_answers(self):
        self.assertEqual(sha1(b"").hexdigest(), "da39a3ee5e6b4b0d3255bfef95601890afd80709")
        self.assertEqual(sha1(b"abc").hexdigest(), "a9993e364706816aba3e25717850c26c9cd0d89d")
        self.assertEqual(
            sha1(b"hello world").hexdigest(), "2aae6c35c94fcfb415dbe95f408b9ce91ee846ed"
        )
        self.assertEqual(
            sha1(b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq").hexdigest(),
            "84983e441c3bd26ebaae4aa1f95129e5e54670f1",
        )

    def test_block_boundaries(self):
        for n in (0, 1, 55, 56, 57, 63, 64, 65, 119, 120, 127, 128, 129, 191, 192):
            msg = bytes((i * 7) & 0xFF for i in range(n))
            self.assertEqual(
                sha1(msg).hexdigest(), hashlib.sha1(msg).hexdigest(), f"length {n}"
            )

    def test_output_length(self):
        for n in range(0, 130, 13):
            h = sha1(b"x" * n)
            self.assertEqual(len(h.digest()), 20)
            self.assertEqual(len(h.hexdigest()), 40)
            self.assertEqual(h.hexdigest(), h.hexdigest().lower())

    def test_non_utf8_input(self):
        msg = b"\xff\xfe\x00\x80" * 40
        self.assertEqual(sha1(msg).digest(), hashlib.sha1(msg).digest())


class StreamingTest(unittest.TestCase):
    def setUp(self):
        self.message = bytes(range(256)) * 2 + b"tail"

    def test_chunk_invariance(self):
        expected = hashlib.sha1(self.message).hexdigest()
        for size in (1, 3, 7, 63, 64, 65, 100, 1000):
            h = HASH()
            for i in range(0, len(self.message), size):
                h.update(self.message[i : i + size])
            self.assertEqual(h.hexdigest(), expected, f"chunk size {size}")

    def test_uneven_chunks(self):
        cuts = [0, 5, 5, 70, 71, 200, 333, len(self.message)]
        h = HASH()
        for start, end in zip(cuts, cuts[1:]):
            h.update(self.message[start:end])
        self.assertEqual(h.digest(), hashlib.sha1(self.message).digest())

    def test_empty_updates(self):
        h = HASH()
        h.update(b"")
        h.update(b"abc")
        h.update(b"")
        self.assertEqual(h.hexdigest(), "a9993e364706816aba3e25717850c26c9cd0d89d")

    def test_pending_stays_below_block_size(self):
        h = HASH()
        for size in (10, 60, 64, 130, 1):
            h.update(b"q" * size)
            self.assertLess(len(h._buffer), 64)
        self.assertEqual(h._counter, 265)

    def test_state_only_changes_on_full_block(self):
        h = HASH()
        h.update(b"x" * 63)
        self.assertEqual(h._H, list(SHA1_INITIAL_HASH_VALUES))
        h.update(b"x")
        self.assertNotEqual(h._H, list(SHA1_INITIAL_HASH_VALUES))
        self.assertEqual(len(h._buffer), 0)

    def test_bytes_like_inputs(self):
        expected = hashlib.sha1(b"abcdef").hexdigest()
        for obj in (b"abcdef", bytearray(b"abcdef"), memoryview(b"abcdef")):
            self.assertEqual(sha1(obj).hexdigest(), expected)

    def test_rejects_text(self):
        with self.assertRaises(TypeError):
            sha1("abc")
        with self.assertRaises(TypeError):
            HASH().update("abc")

    def test_digest_is_repeatable(self):
        h = sha1(b"abc")
        self.assertEqual(h.digest(), h.digest())
        h.update(b"def")
        self.assertEqual(h.hexdigest(), hashlib.sha1(b"abcdef").hexdigest())

    def test_copy_is_independent(self):
        h = sha1(b"abc")
        clone = h.copy()
        clone.update(b"def")
        self.assertEqual(h.hexdigest(), hashlib.sha1(b"abc").hexdigest())
        self.assertEqual(clone.hexdigest(), hashlib.sha1(b"abcdef").hexdigest())

    def test_copy_keeps_subclass(self):
        class Tracked(HASH):
            __slots__ = ()

        clone = Tracked().copy()
        self.assertIs(type(clone), Tracked)
        self.assertEqual(clone.hexdigest(), "da39a3ee5e6b4b0d3255bfef95601890afd80709")


class FinalizeTest(unittest.TestCase):
    def test_finalize_returns_digest(self):
        h = sha1(b"abc")
        self.assertEqual(h.finalize(), bytes.fromhex("a9993e364706816aba3e25717850c26c9cd0d89d"))
        self.assertTrue(h.finalized)
        self.assertEqual(h.hexdigest(), "a9993e364706816aba3e25717850c26c9cd0d89d")

    def test_update_after_finalize(self):
        h = sha1(b"abc")
        h.finalize()
        with self.assertRaises(EngineFinalizedError):
            h.update(b"more")
        with self.assertRaises(EngineFinalizedError):
            h.finalize()
        with self.assertRaises(EngineFinalizedError):
            h.copy()


class LengthEncodingTest(unittest.TestCase):
    def test_pad_layout(self):
        padded = pad(b"abc", 24)
        self.assertEqual(len(padded), 64)
        self.assertEqual(padded[3], 0x80)
        self.assertEqual(padded[4:56], bytes(52))
        self.assertEqual(padded[56:], (24).to_bytes(8, "big"))

    def test_pad_spills_into_extra_block(self):
        self.assertEqual(len(pad(b"x" * 55, 440)), 64)
        self.assertEqual(len(pad(b"x" * 56, 448)), 128)
        self.assertEqual(len(pad(b"x" * 63, 504)), 128)

    def test_bit_length_wraps_modulo_2_64(self):
        # 2**61 bytes is 2**64 bits, which encodes as zero.
        h = HASH()
        h._counter = 2**61
        self.assertEqual(h.hexdigest(), "da39a3ee5e6b4b0d3255bfef95601890afd80709")

    def test_large_counter(self):
        # 2**32 bytes: the length field reads 00 00 00 08 00 00 00 00.
        h = HASH()
        h._counter = 2**32
        self.assertEqual(h.hexdigest(), "8aed1e1f06660956344d44af126fda5d6a789a43")
        self.assertEqual(pad(b"", 2**35)[56:], bytes.fromhex("0000000800000000"))

    def test_counter_wraps(self):
        h = HASH()
        h._counter = MASK64
        h.update(b"a")
        self.assertEqual(h._counter, 0)


class WordFunctionTest(unittest.TestCase):
    def test_rotations(self):
        self.assertEqual(rotl(0x80000000, 1), 1)
        self.assertEqual(rotl(0x12345678, 8), 0x34567812)
        self.assertEqual(rotl(rotl(0xDEADBEEF, 13), 19), 0xDEADBEEF)

    def test_round_functions(self):
        x, y, z = 0xF0F0F0F0, 0xFF00FF00, 0x0F0F0F0F
        self.assertEqual(choice(x, y, z), 0xFF0FFF0F & 0xFFFFFFFF)
        self.assertEqual(parity(x, y, z), 0x00FF00FF)
        self.assertEqual(majority(x, y, z), 0xF0F0F0F0 & 0xFF00FF00 | 0xF0F0F0F0 & 0x0F0F0F0F | 0xFF00FF00 & 0x0F0F0F0F)

    def test_round_table(self):
        self.assertEqual(round_function(0), (choice, 0x5A827999))
        self.assertEqual(round_function(19), (choice, 0x5A827999))
        self.assertEqual(round_function(20), (parity, 0x6ED9EBA1))
        self.assertEqual(round_function(59), (majority, 0x8F1BBCDC))
        self.assertEqual(round_function(79), (parity, 0xCA62C1D6))
        with self.assertRaises(ValueError):
            round_function(80)


class UsedForSecurityTest(unittest.TestCase):
    def test_warns_when_used_for_security(self):
        with self.assertWarns(UserWarning):
            sha1(b"abc", usedforsecurity=True)

    def test_silent_by_default(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            sha1(b"abc")

    def test_attributes(self):
        self.assertEqual(sha1.name, "sha1")
        self.assertEqual(sha1.digest_size, 20)
        h = sha1()
        self.assertEqual((h.name, h.digest_size, h.block_size), ("sha1", 20, 64))


if __name__ == "__main__":
    unittest.main()
