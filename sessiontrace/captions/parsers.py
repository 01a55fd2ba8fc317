"""
Caption parsers for WebVTT, SubRip and structured JSON sources.

Each parser turns raw caption text into an ordered list of Caption records in
file order. Malformed cues and blocks are skipped rather than failing the
whole parse; only undecodable structured (JSON) text raises.
"""

import json
import logging
import re
from typing import List, Optional

from ..errors import CaptionDecodeError
from ..models import Caption, CaptionFormat
from ..utils import parse_srt_time, parse_vtt_time

logger = logging.getLogger(__name__)

_LINE_SPLIT_PATTERN = re.compile(r'\r?\n')
_CUE_INDEX_PATTERN = re.compile(r'^\d+$')
_BLOCK_SPLIT_PATTERN = re.compile(r'\n\s*\n')


def parse_vtt(raw_text: str) -> List[Caption]:
    """
    Parse WebVTT text into captions.

    A line containing '-->' opens a cue; following non-blank lines (except the
    WEBVTT header and bare cue numbers) become its text, joined with spaces.
    A blank line closes the cue. Cues without text are dropped.

    Args:
        raw_text: WebVTT file content as string

    Returns:
        List of Caption records in file order

    Example:
        >>> parse_vtt("WEBVTT\\n\\n1\\n00:00:01.000 --> 00:00:05.000\\nHello\\n\\n")
        [Caption(start=1.0, end=5.0, text='Hello')]
    """
    captions: List[Caption] = []
    start: Optional[float] = None
    end: Optional[float] = None
    text_lines: List[str] = []
    dropped = 0

    def flush() -> None:
        nonlocal start, end, text_lines, dropped
        if start is not None:
            if text_lines:
                captions.append(Caption(start=start, end=end, text=' '.join(text_lines)))
            else:
                dropped += 1
        start, end, text_lines = None, None, []

    for raw_line in _LINE_SPLIT_PATTERN.split(raw_text):
        line = raw_line.strip()

        if '-->' in line:
            flush()
            start_text, end_text = line.split('-->', 1)
            start = parse_vtt_time(start_text)
            end = parse_vtt_time(end_text)
        elif not line:
            flush()
        elif start is not None and line != 'WEBVTT' and not _CUE_INDEX_PATTERN.match(line):
            text_lines.append(line)

    flush()

    logger.debug(f"Parsed {len(captions)} VTT cues ({dropped} empty cues dropped)")
    return captions


def parse_srt(raw_text: str) -> List[Caption]:
    """
    Parse SubRip (SRT) text into captions.

    Blocks are separated by blank lines. Each block needs at least three
    lines: a sequence number (ignored), a timing line containing '-->', and
    one or more text lines joined with spaces. Other blocks are skipped.

    Args:
        raw_text: SRT file content as string

    Returns:
        List of Caption records in file order

    Example:
        >>> parse_srt("1\\n00:00:00,500 --> 00:00:02,000\\nLine one\\nLine two\\n")
        [Caption(start=0.5, end=2.0, text='Line one Line two')]
    """
    normalized = raw_text.replace('\r\n', '\n').replace('\r', '\n')

    captions: List[Caption] = []
    skipped = 0

    for block in _BLOCK_SPLIT_PATTERN.split(normalized.strip()):
        lines = block.strip().split('\n')
        if len(lines) < 3 or '-->' not in lines[1]:
            skipped += 1
            continue

        start_text, end_text = lines[1].split('-->', 1)
        text = ' '.join(line.strip() for line in lines[2:]).strip()
        if not text:
            skipped += 1
            continue

        captions.append(Caption(
            start=parse_srt_time(start_text),
            end=parse_srt_time(end_text),
            text=text,
        ))

    logger.debug(f"Parsed {len(captions)} SRT cues ({skipped} blocks skipped)")
    return captions


def parse_caption_json(raw_text: str, source: Optional[str] = None) -> List[Caption]:
    """
    Decode a JSON array of {start, end, text} objects into captions.

    No partial recovery is attempted: any decode or shape problem fails the
    whole call.

    Args:
        raw_text: JSON text
        source: Optional file name, used in the error message

    Returns:
        List of Caption records in array order

    Raises:
        CaptionDecodeError: If the text is not a JSON array of caption objects
    """
    try:
        records = json.loads(raw_text)
    except ValueError as e:
        raise CaptionDecodeError(str(e), source) from e

    if not isinstance(records, list):
        raise CaptionDecodeError(f"expected a JSON array, got {type(records).__name__}", source)

    captions = []
    for index, record in enumerate(records):
        try:
            captions.append(Caption(
                start=float(record['start']),
                end=float(record['end']),
                text=str(record['text']),
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise CaptionDecodeError(f"invalid caption record at index {index}: {e!r}", source) from e

    logger.debug(f"Decoded {len(captions)} structured captions")
    return captions


def parse_captions(raw_text: str, caption_format: CaptionFormat, source: Optional[str] = None) -> List[Caption]:
    """
    Parse caption text with the parser for the given format.

    Args:
        raw_text: Caption file content
        caption_format: Format chosen by the caller (see CaptionFormat.from_filename)
        source: Optional file name for error messages

    Returns:
        List of Caption records
    """
    if caption_format is CaptionFormat.VTT:
        return parse_vtt(raw_text)
    if caption_format is CaptionFormat.SRT:
        return parse_srt(raw_text)
    return parse_caption_json(raw_text, source)


def parse_caption_file(path: str) -> List[Caption]:
    """
    Read a UTF-8 caption file and parse it according to its suffix.

    Args:
        path: Path to a .vtt, .srt or JSON caption file

    Returns:
        List of Caption records

    Raises:
        CaptionDecodeError: If a structured caption file cannot be decoded
    """
    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()

    logger.info(f"Parsing caption file: {path}")
    return parse_captions(content, CaptionFormat.from_filename(path), source=path)
