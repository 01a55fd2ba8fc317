"""
Basic SessionTrace usage example.

Demonstrates parsing a caption file and looking up captions by playback time.
"""

import sys

from sessiontrace import CaptionTrack

def main():
    path = sys.argv[1] if len(sys.argv) > 1 else "captions.vtt"

    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    track = CaptionTrack.from_source(content, path)
    print(f"Loaded {len(track)} captions")

    for second in range(0, 30, 5):
        caption = track.query(float(second))
        print(f"{second:>3}s: {caption.text if caption else '-'}")

if __name__ == "__main__":
    main()
