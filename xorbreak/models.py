"""Core data models for xorbreak"""
from dataclasses import dataclass, field
from typing import Any, Dict


def _preview(text: str, limit: int = 50) -> str:
    return text[:limit].replace("\n", "\\n")


@dataclass
class SingleByteAnswer:
    """Best single-byte key for a ciphertext and the text it decodes to"""
    key: int                          # 0-255
    plaintext: str                    # lossily decoded, score-winning text
    score: float                      # frequency score of plaintext
    ciphertext: bytes = field(default=b"", repr=False)  # original input

    @property
    def key_char(self) -> str:
        return chr(self.key)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'key': self.key,
            'key_hex': f"{self.key:02X}",
            'plaintext': self.plaintext,
            'score': self.score,
        }

    def __str__(self) -> str:
        return (f"Key: 0x{self.key:02X} | Score: {self.score:.2f} | "
                f"Preview: {_preview(self.plaintext)}")


@dataclass
class KeysizeCandidate:
    """A hypothesised repeating-key length ranked by normalized Hamming distance"""
    keysize: int
    normalized_distance: float

    def to_dict(self) -> Dict[str, Any]:
        return {'keysize': self.keysize, 'normalized_distance': self.normalized_distance}

    def __str__(self) -> str:
        return f"Keysize: {self.keysize} | Distance: {self.normalized_distance:.4f}"


@dataclass
class KeyRecoveryAnswer:
    """Recovered repeating key with the full decoded text and its score"""
    key: bytes
    plaintext: str
    score: float

    @property
    def keysize(self) -> int:
        return len(self.key)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'key_hex': self.key.hex().upper(),
            'key_text': self.key.decode('utf-8', errors='replace'),
            'keysize': self.keysize,
            'plaintext': self.plaintext,
            'score': self.score,
        }

    def __str__(self) -> str:
        key_hex = ''.join(f'{b:02X}' for b in self.key)
        return (f"Key: {key_hex} (length: {self.keysize}) | Score: {self.score:.2f} | "
                f"Preview: {_preview(self.plaintext)}")
