"""Local text-to-speech playback through the platform speech engine.

``LocalSpeaker.speak`` returns a ``SpeechTask`` handle right away; playback
happens on a single background thread (pyttsx3 engines are not thread-safe),
so utterances play one after another. The handle reports when speaking has
actually finished, letting callers show an honest "speaking" state.
"""

from __future__ import annotations

from concurrent.futures import CancelledError, Future, ThreadPoolExecutor

from studykit.core.config import SpeechConfig
from studykit.core.languages import speech_locale
from studykit.utils.console import console


def _voice_languages(voice) -> list[str]:
    """Normalise a pyttsx3 voice's language list (espeak reports bytes like b'\\x05en-us')."""
    langs = []
    for lang in getattr(voice, "languages", None) or []:
        if isinstance(lang, bytes):
            lang = lang.decode("utf-8", errors="ignore")
        langs.append(lang.strip("\x00\x01\x02\x03\x04\x05").lower().replace("_", "-"))
    return langs


def find_voice(voices: list, locale: str) -> str | None:
    """Pick the id of the voice best matching a locale.

    Prefers an exact locale match ("vi-vn"), then the bare language ("vi"),
    then a voice whose id mentions the language.
    """
    locale = locale.lower().replace("_", "-")
    language = locale.split("-")[0]

    for voice in voices:
        if locale in _voice_languages(voice):
            return voice.id
    for voice in voices:
        if any(lang.split("-")[0] == language for lang in _voice_languages(voice)):
            return voice.id
    for voice in voices:
        voice_id = str(voice.id).lower()
        if locale in voice_id or f"{language}-" in voice_id or voice_id.endswith(f"/{language}"):
            return voice.id
    return None


class SpeechTask:
    """Handle for one queued utterance."""

    def __init__(self, future: Future, text: str, locale: str, speaker: LocalSpeaker) -> None:
        self._future = future
        self._speaker = speaker
        self.text = text
        self.locale = locale

    def done(self) -> bool:
        return self._future.done()

    @property
    def speaking(self) -> bool:
        return self._future.running()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until playback ends. Returns False if it timed out."""
        try:
            self._future.result(timeout=timeout)
        except TimeoutError:
            return False
        except CancelledError:
            return True
        except Exception:
            # Failure is exposed through ``error``
            return True
        return True

    @property
    def error(self) -> BaseException | None:
        if not self._future.done() or self._future.cancelled():
            return None
        return self._future.exception()

    def cancel(self) -> None:
        """Drop the utterance if still queued, otherwise stop the engine."""
        if not self._future.cancel():
            self._speaker.stop()


class LocalSpeaker:
    """Speaks text with the operating system's speech engine (pyttsx3)."""

    def __init__(self, config: SpeechConfig | None = None) -> None:
        self.config = config or SpeechConfig()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="studykit-speech")
        self._engine = None

    def _get_engine(self):
        if self._engine is None:
            try:
                import pyttsx3
            except ImportError:
                raise ImportError(
                    "pyttsx3 is not installed. Install with: pip install 'studykit[speech]'"
                )
            engine = pyttsx3.init()
            engine.setProperty("rate", self.config.rate)
            engine.setProperty("volume", self.config.volume)
            self._engine = engine
        return self._engine

    def _say(self, text: str, locale: str) -> None:
        engine = self._get_engine()
        voice_id = find_voice(engine.getProperty("voices") or [], locale)
        if voice_id is not None:
            engine.setProperty("voice", voice_id)
        else:
            console.print(f"[yellow]No local voice for {locale}, using the default voice.[/yellow]")
        engine.say(text)
        engine.runAndWait()

    def speak(self, text: str, language: str) -> SpeechTask:
        """Queue ``text`` for playback in ``language`` (code or locale).

        Never raises for engine problems; they end up on ``SpeechTask.error``.
        """
        locale = speech_locale(language)
        future = self._executor.submit(self._say, text, locale)
        return SpeechTask(future, text, locale, self)

    def stop(self) -> None:
        if self._engine is not None:
            self._engine.stop()

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> LocalSpeaker:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
