import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from catresume.core.config import settings  # noqa: E402
from catresume.services.audio import generate_cat_audio  # noqa: E402

HIGHLIGHTS = ["Python expert", "Team lead", "MSc CS", "AWS certified", "Speaker"]


class CatAudioTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.audio_dir = Path(self._tmp.name) / "audio"

    def tearDown(self):
        self._tmp.cleanup()

    async def test_writes_mp3_and_returns_public_url(self):
        speech = AsyncMock(return_value=b"ID3fake-mp3-bytes")
        with patch("catresume.services.audio.synthesize_speech", speech):
            url = await generate_cat_audio("summary", HIGHLIGHTS, 4, "Solid fit.", audio_dir=self.audio_dir)

        files = list(self.audio_dir.glob("cat_audio_*.mp3"))
        self.assertEqual(len(files), 1)
        self.assertEqual(files[0].read_bytes(), b"ID3fake-mp3-bytes")
        self.assertEqual(url, f"{settings.public_base_url}/audio/{files[0].name}")

        script = speech.await_args.args[0]
        self.assertIn("Professor Whiskers", script)
        self.assertIn("4 out of 5 paws", script)

    async def test_tts_failure_returns_error_string(self):
        with patch("catresume.services.audio.synthesize_speech", AsyncMock(side_effect=RuntimeError("voice offline"))):
            url = await generate_cat_audio("summary", HIGHLIGHTS, 3, "Average.", audio_dir=self.audio_dir)

        self.assertEqual(url, "Error generating cat audio: voice offline")
        self.assertFalse(self.audio_dir.exists() and any(self.audio_dir.iterdir()))

    async def test_empty_audio_is_treated_as_failure(self):
        with patch("catresume.services.audio.synthesize_speech", AsyncMock(return_value=b"")):
            url = await generate_cat_audio("summary", HIGHLIGHTS, 3, "Average.", audio_dir=self.audio_dir)
        self.assertTrue(url.startswith("Error generating cat audio:"))


if __name__ == "__main__":
    unittest.main()
