"""PCM to WAV container encoding.

The speech API returns bare little-endian linear PCM with no header. Browsers
and audio players need a RIFF/WAVE container to know the sample rate, channel
count and bit depth, so every response is wrapped in the canonical 44-byte
header described below before it leaves the service.

    offset  size  field
    0       4     "RIFF"
    4       4     36 + data length
    8       4     "WAVE"
    12      4     "fmt "
    16      4     16 (fmt chunk size)
    20      2     1 (PCM)
    22      2     channels
    24      4     sample rate
    28      4     byte rate
    32      2     block align
    34      2     bits per sample
    36      4     "data"
    40      4     data length
    44      ...   PCM bytes, unmodified
"""

import struct
from dataclasses import dataclass
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .exceptions import InvalidArgumentError

HEADER_SIZE = 44
FMT_CHUNK_SIZE = 16
WAVE_FORMAT_PCM = 1

UINT16_MAX = 0xFFFF
UINT32_MAX = 0xFFFFFFFF
# ChunkSize (36 + data length) must still fit in a uint32.
MAX_DATA_SIZE = UINT32_MAX - (HEADER_SIZE - 8)

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")

PCMData = Union[bytes, bytearray, memoryview, str]


class AudioFormat(BaseModel):
    """Format descriptor for raw linear PCM."""

    model_config = ConfigDict(frozen=True)

    sample_rate: int = Field(default=24000, gt=0, strict=True)
    channels: int = Field(default=1, gt=0, strict=True)
    sample_width: int = Field(default=2, gt=0, strict=True)
    format: str = Field(default="wav", min_length=1)

    @model_validator(mode="after")
    def _fits_header(self) -> "AudioFormat":
        try:
            check_header_fields(self.sample_rate, self.channels, self.sample_width)
        except InvalidArgumentError as e:
            raise ValueError(e.message) from e
        return self

    @property
    def block_align(self) -> int:
        return self.channels * self.sample_width

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.block_align

    @property
    def bits_per_sample(self) -> int:
        return self.sample_width * 8

    def encode(self, pcm: PCMData) -> bytes:
        return pcm_to_wav(pcm, self.sample_rate, self.channels, self.sample_width)


@dataclass(frozen=True)
class WavHeader:
    chunk_size: int
    audio_format: int
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_size: int


def _require_positive_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgumentError(
            f"Invalid {name}: must be a positive integer, got {value!r}"
        )
    return value


def _coerce_pcm(pcm: object) -> bytes:
    if isinstance(pcm, bytes):
        return pcm
    if isinstance(pcm, (bytearray, memoryview)):
        return bytes(pcm)
    if isinstance(pcm, str):
        return pcm.encode("utf-8")
    raise InvalidArgumentError(
        f"Invalid pcm: must be bytes, bytearray, memoryview or str, got {type(pcm).__name__}"
    )


def check_header_fields(
    sample_rate: int, channels: int, sample_width: int
) -> tuple[int, int, int]:
    """Validate format parameters against the header field widths.

    Returns the derived ``(block_align, byte_rate, bits_per_sample)``.
    """
    _require_positive_int("sample_rate", sample_rate)
    _require_positive_int("channels", channels)
    _require_positive_int("sample_width", sample_width)

    block_align = channels * sample_width
    byte_rate = sample_rate * block_align
    bits_per_sample = sample_width * 8

    if channels > UINT16_MAX:
        raise InvalidArgumentError(f"Invalid channels: {channels} exceeds {UINT16_MAX}")
    if block_align > UINT16_MAX or bits_per_sample > UINT16_MAX:
        raise InvalidArgumentError(
            f"Invalid sample_width: block align {block_align} / "
            f"{bits_per_sample} bits per sample do not fit the WAV header"
        )
    if sample_rate > UINT32_MAX or byte_rate > UINT32_MAX:
        raise InvalidArgumentError(
            f"Invalid sample_rate: byte rate {byte_rate} does not fit the WAV header"
        )
    return block_align, byte_rate, bits_per_sample


def pcm_to_wav(
    pcm: PCMData,
    sample_rate: int,
    channels: int,
    sample_width: int,
) -> bytes:
    """Wrap raw PCM bytes in a canonical WAV header.

    Args:
        pcm: Interleaved linear PCM samples
        sample_rate: Samples per second per channel
        channels: Number of interleaved channels
        sample_width: Bytes per sample per channel (2 for 16-bit)

    Returns:
        ``44 + len(pcm)`` bytes of WAV data

    Raises:
        InvalidArgumentError: If any argument is invalid or a header field
            would overflow its width
    """
    block_align, byte_rate, bits_per_sample = check_header_fields(
        sample_rate, channels, sample_width
    )
    data = _coerce_pcm(pcm)
    data_size = len(data)

    if data_size > MAX_DATA_SIZE:
        raise InvalidArgumentError(
            f"Invalid pcm: {data_size} bytes exceeds the WAV limit of {MAX_DATA_SIZE}"
        )

    header = _HEADER.pack(
        b"RIFF",
        HEADER_SIZE - 8 + data_size,
        b"WAVE",
        b"fmt ",
        FMT_CHUNK_SIZE,
        WAVE_FORMAT_PCM,
        channels,
        sample_rate,
        byte_rate,
        block_align,
        bits_per_sample,
        b"data",
        data_size,
    )
    return header + data


def read_wav_header(data: bytes) -> WavHeader:
    """Parse the canonical 44-byte header written by :func:`pcm_to_wav`."""
    if len(data) < HEADER_SIZE:
        raise InvalidArgumentError(
            f"WAV data too short: {len(data)} bytes, need at least {HEADER_SIZE}"
        )

    (
        riff,
        chunk_size,
        wave,
        fmt,
        fmt_size,
        audio_format,
        channels,
        sample_rate,
        byte_rate,
        block_align,
        bits_per_sample,
        data_tag,
        data_size,
    ) = _HEADER.unpack_from(data)

    if riff != b"RIFF" or wave != b"WAVE":
        raise InvalidArgumentError("Not a RIFF/WAVE file")
    if fmt != b"fmt " or fmt_size != FMT_CHUNK_SIZE or data_tag != b"data":
        raise InvalidArgumentError("Unsupported WAV layout: expected canonical PCM header")

    return WavHeader(
        chunk_size=chunk_size,
        audio_format=audio_format,
        channels=channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits_per_sample,
        data_size=data_size,
    )


def is_frame_aligned(pcm: bytes, channels: int, sample_width: int) -> bool:
    """Return True if ``pcm`` holds a whole number of sample frames."""
    return len(pcm) % (channels * sample_width) == 0


def pcm_duration(num_bytes: int, audio_format: AudioFormat) -> float:
    return num_bytes / audio_format.byte_rate
