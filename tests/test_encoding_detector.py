import unittest

from mdclip.utils.encoding_detector import decode_text, detect_encoding


class TestEncodingDetector(unittest.TestCase):
    def test_utf8_fast_path(self):
        self.assertEqual(detect_encoding("héllo".encode("utf-8")), "utf-8")
        self.assertEqual(decode_text("héllo".encode("utf-8")), "héllo")

    def test_bom_is_dropped(self):
        self.assertEqual(decode_text(b"\xef\xbb\xbfprint(1)\n"), "print(1)\n")

    def test_legacy_single_byte_text(self):
        raw = "café crème brûlée, déjà vu. ".encode("latin-1") * 20
        text = decode_text(raw)
        self.assertTrue(text.startswith("caf"))
        self.assertNotEqual(detect_encoding(raw), "utf-8")

    def test_empty(self):
        self.assertEqual(decode_text(b""), "")


if __name__ == "__main__":
    unittest.main()
