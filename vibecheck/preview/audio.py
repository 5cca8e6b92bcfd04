"""Audio resource used for preview playback.

AudioHandle is the contract the playback session relies on. The session is
its only owner: it creates a handle through an AudioFactory, drives it, and
stops it when the selection changes or the view goes away.

MpvAudioHandle plays a URL with an mpv subprocess (one process per handle)
and controls it through mpv's JSON IPC socket. Controls never block the
event loop: commands are queued to a sender thread that owns the socket.
Natural end of playback is detected by a watcher thread and reported back on
the event loop.
Unix sockets only.
"""

from abc import ABC, abstractmethod
import asyncio
import json
import logging
import os
import queue
import socket
import subprocess
import tempfile
import threading
import time
from typing import Any, Callable, Optional
import uuid

from vibecheck import config
from vibecheck.core import VibeCheckError

logger = logging.getLogger(__name__)


class AudioPlaybackError(VibeCheckError):
    """The runtime refused to start or control playback."""


class AudioHandle(ABC):
    """
    One playable audio resource bound to a single URL.
    """

    url: str

    @abstractmethod
    def play(self) -> None:
        """Start playback. Raises AudioPlaybackError on failure."""
        raise NotImplementedError

    @abstractmethod
    def pause(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def resume(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_volume(self, volume: float) -> None:
        """Volume in [0, 1]."""
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        """Stop and detach. Must be safe to call more than once."""
        raise NotImplementedError


EndedCallback = Callable[[AudioHandle], None]
AudioFactory = Callable[[str, EndedCallback], AudioHandle]


class MpvAudioHandle(AudioHandle):
    CONNECT_TIMEOUT_S = 2.0
    STOP_TIMEOUT_S = 2.0

    def __init__(
        self,
        url: str,
        on_ended: EndedCallback,
        mpv_path: str = config.MPV_PATH,
    ):
        self.url = url
        self._on_ended = on_ended
        self._mpv_path = mpv_path
        self._volume = config.DEFAULT_VOLUME
        self._proc: Optional[subprocess.Popen] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._released = False
        self._commands: "queue.Queue[Optional[bytes]]" = queue.Queue()
        self._ipc_path = os.path.join(
            tempfile.gettempdir(), f"vibecheck-mpv-{uuid.uuid4().hex}.sock"
        )

    # ---- lifecycle ----

    def play(self) -> None:
        if self._released:
            raise AudioPlaybackError("Audio handle already released.")
        if self._proc is not None:
            self.resume()
            return

        args = [
            self._mpv_path,
            "--no-video",
            "--audio-display=no",
            "--keep-open=no",
            "--idle=no",
            "--terminal=no",
            "--msg-level=all=warn",
            f"--input-ipc-server={self._ipc_path}",
            f"--volume={round(self._volume * 100)}",
            self.url,
        ]

        try:
            self._proc = subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise AudioPlaybackError(f"Could not start mpv ({e}).") from e

        self._loop = asyncio.get_running_loop()
        threading.Thread(
            target=self._watch_process,
            args=(self._proc,),
            name="mpv-watch",
            daemon=True,
        ).start()
        threading.Thread(target=self._ipc_loop, name="mpv-ipc-tx", daemon=True).start()

    def stop(self) -> None:
        """
        Release the handle without blocking: mpv is asked to terminate here
        and reaped (killed if it lingers) on a background thread.
        """
        if self._released:
            return
        self._released = True
        self._commands.put(None)

        proc, self._proc = self._proc, None
        if proc is None:
            self._remove_socket()
            return

        if proc.poll() is None:
            proc.terminate()
        threading.Thread(
            target=self._reap, args=(proc,), name="mpv-reap", daemon=True
        ).start()

    @property
    def is_released(self) -> bool:
        return self._released

    def _watch_process(self, proc: subprocess.Popen) -> None:
        returncode = proc.wait()
        if self._released or self._loop is None:
            return
        if returncode != 0:
            logger.warning("mpv exited with code %s for %s", returncode, self.url)
        try:
            self._loop.call_soon_threadsafe(self._on_ended, self)
        except RuntimeError:
            # Event loop already closed (application shutting down).
            pass

    def _reap(self, proc: subprocess.Popen) -> None:
        try:
            proc.wait(timeout=self.STOP_TIMEOUT_S)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()
        self._remove_socket()

    def _remove_socket(self) -> None:
        try:
            os.remove(self._ipc_path)
        except OSError:
            pass

    # ---- controls ----

    def pause(self) -> None:
        self._set_property("pause", True)

    def resume(self) -> None:
        self._set_property("pause", False)

    def set_volume(self, volume: float) -> None:
        self._volume = volume
        if self._proc is not None:
            self._set_property("volume", round(volume * 100))

    def _set_property(self, name: str, value: Any) -> None:
        if self._proc is None or self._released:
            raise AudioPlaybackError("mpv is not running.")
        payload = {"command": ["set_property", name, value]}
        self._commands.put(json.dumps(payload).encode("utf-8") + b"\n")

    # ---- IPC sender thread ----

    def _ipc_loop(self) -> None:
        """
        Connect once to mpv's socket and forward queued commands in order.
        A None in the queue closes the connection.
        """
        sock = self._connect()
        if sock is None:
            return
        with sock:
            while True:
                line = self._commands.get()
                if line is None:
                    return
                try:
                    sock.sendall(line)
                except OSError as e:
                    if not self._released:
                        logger.warning("mpv IPC send failed for %s: %s", self.url, e)
                    return

    def _connect(self) -> Optional[socket.socket]:
        # The socket appears shortly after mpv starts; retry until it does.
        deadline = time.monotonic() + self.CONNECT_TIMEOUT_S
        last_err: Optional[Exception] = None
        while time.monotonic() < deadline and not self._released:
            s = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            try:
                s.connect(self._ipc_path)
                return s
            except OSError as e:
                s.close()
                last_err = e
                time.sleep(0.05)
        if not self._released:
            logger.warning("mpv IPC unavailable for %s: %r", self.url, last_err)
        return None


def mpv_audio_factory(url: str, on_ended: EndedCallback) -> AudioHandle:
    return MpvAudioHandle(url, on_ended)
