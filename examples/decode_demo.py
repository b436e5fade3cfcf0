#!/usr/bin/env python3  # noqa: EXE001
"""
Minimal demonstration of response decoding

Decodes a healthy reply, a reply with a value the client has never seen, and
the known ``"content": {}`` defect, showing how each surfaces to the caller.
"""  # noqa: D212, D415

import logging

from gemini_response import (
    EmptyContentError,
    MalformedContentError,
    decode_response,
)

DOCUMENTS = {
    "healthy": {
        "candidates": [
            {
                "content": {"parts": [{"text": "Paris."}], "role": "model"},
                "finishReason": 1,
            }
        ]
    },
    "future finish reason": {
        "candidates": [{"content": {"parts": [{"text": "Hi"}]}, "finishReason": 42}]
    },
    "empty content bug": {"candidates": [{"content": {}, "finishReason": 3}]},
    "corrupted content": {"candidates": [{"content": {"parts": 7}}]},
}


def main():  # noqa: ANN201, D103
    logging.basicConfig(level=logging.WARNING, format="  [%(levelname)s] %(message)s")

    for name, document in DOCUMENTS.items():
        print(f"📄 {name}")
        try:
            response = decode_response(document)
        except EmptyContentError as e:
            print(f"   no output (known service defect): {e}")
        except MalformedContentError as e:
            print(f"   corrupted: {e}")
        else:
            candidate = response.candidates[0]
            print(f"   text={response.text!r} finish={candidate.finish_reason!r}")


if __name__ == "__main__":
    main()
