from sentia.services.audio.player import (
    AudioPlayback,
    AudioPlayer,
    autoplay_audio_guide,
    play_audio_guide,
)

__all__ = ["AudioPlayback", "AudioPlayer", "autoplay_audio_guide", "play_audio_guide"]
