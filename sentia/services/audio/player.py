"""Audio guide playback behind the premium gate."""

import logging
from typing import Optional, Protocol, runtime_checkable

from sentia.config.constants import Feature
from sentia.services.access import FeatureAccessGate, PaywallData
from sentia.services.analysis.models import AnalysisResult
from sentia.services.base import CamelModel

logger = logging.getLogger(__name__)


@runtime_checkable
class AudioPlayer(Protocol):
    """Text-to-speech output supplied by the host device."""

    async def speak(self, text: str) -> None: ...

    async def stop(self) -> None: ...

    async def headphones_connected(self) -> bool: ...


class AudioPlayback(CamelModel):
    """Result of a playback request."""

    played: bool
    paywall: Optional[PaywallData] = None


async def play_audio_guide(
    gate: FeatureAccessGate,
    player: AudioPlayer,
    result: AnalysisResult,
) -> AudioPlayback:
    """Play the audio guide if the user may, otherwise return paywall copy."""
    access = await gate.can_access(Feature.AUDIO_GUIDE)
    if not access.can_access:
        return AudioPlayback(played=False, paywall=gate.get_paywall_data(Feature.AUDIO_GUIDE))
    if not result.audio_guide:
        return AudioPlayback(played=False)

    await player.stop()
    await player.speak(result.audio_guide)
    return AudioPlayback(played=True)


async def autoplay_audio_guide(
    gate: FeatureAccessGate,
    player: AudioPlayer,
    result: AnalysisResult,
) -> bool:
    """Start the guide right after analysis for premium users wearing headphones."""
    if not result.audio_guide:
        return False
    access = await gate.can_access(Feature.AUDIO_GUIDE)
    if not access.can_access:
        return False
    if not await player.headphones_connected():
        return False

    logger.info("Autoplaying audio guide")
    await player.stop()
    await player.speak(result.audio_guide)
    return True
