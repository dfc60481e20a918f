"""Flask JSON API for the xorbreak engine"""
import logging
from typing import Any, Dict, Optional

from flask import Flask, request, jsonify

from ..__version__ import __version__
from ..analysis.hamming import hamming_distance
from ..analysis.scorer import frequency_score, chi_square_score
from ..breakers.repeating_key import RepeatingKeyBreaker
from ..breakers.single_byte import SingleByteBreaker
from ..config import BreakerConfig
from ..error_handling import XorBreakError, create_error
from ..utils.codec import decode_input

logger = logging.getLogger(__name__)


class BreakerWebServer:
    """Web API server exposing the scorers and breakers"""

    def __init__(self, config: Optional[BreakerConfig] = None):
        """
        Initialize the web server.

        Args:
            config: Default engine configuration for breaking requests
        """
        self.app = Flask(__name__)
        self.app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024
        self.config = config or BreakerConfig()
        self.port = 8080

        self._register_routes()

    def _json_body(self) -> Dict[str, Any]:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise create_error("invalid_request", reason="expected a JSON object body")
        return data

    def _ciphertext(self, data: Dict[str, Any], field: str = 'ciphertext') -> bytes:
        return decode_input(str(data.get(field, '')), data.get('encoding', 'hex'))

    def _int_field(self, data: Dict[str, Any], field: str, default: Optional[int] = None) -> int:
        try:
            return int(data.get(field, default))
        except (TypeError, ValueError) as e:
            raise create_error("invalid_request", reason=f"{field} must be an integer") from e

    def _request_config(self, data: Dict[str, Any]) -> BreakerConfig:
        overrides = data.get('config')
        if not overrides:
            return self.config
        if not isinstance(overrides, dict):
            raise create_error("invalid_request", reason="config must be a JSON object")
        merged = self.config.to_dict()
        merged.update(overrides)
        return BreakerConfig.from_mapping(merged)

    def _register_routes(self):
        """Register all Flask routes"""

        @self.app.errorhandler(XorBreakError)
        def handle_xorbreak_error(error: XorBreakError):
            logger.warning(f"Rejected request to {request.path}: {error.message}")
            return jsonify({
                'error': error.message,
                'category': error.category.value,
                'suggestion': error.suggestion
            }), 400

        @self.app.route('/api/health')
        def health():
            return jsonify({'status': 'ok', 'version': __version__})

        @self.app.route('/api/score', methods=['POST'])
        def score():
            """Frequency and chi-squared scores of a text"""
            text = str(self._json_body().get('text', ''))
            try:
                chi2 = chi_square_score(text)
            except ZeroDivisionError:
                # Nothing countable in the text
                chi2 = None
            return jsonify({
                'frequency_score': frequency_score(text),
                'chi_square_score': chi2
            })

        @self.app.route('/api/hamming', methods=['POST'])
        def hamming():
            """Bitwise Hamming distance of two equal-length inputs"""
            data = self._json_body()
            left = self._ciphertext(data, 'left')
            right = self._ciphertext(data, 'right')
            return jsonify({'distance': hamming_distance(left, right)})

        @self.app.route('/api/xor/single', methods=['POST'])
        def xor_single():
            """Single-byte XOR breaker"""
            data = self._json_body()
            ciphertext = self._ciphertext(data)
            top_n = self._int_field(data, "top", 5)
            if top_n < 1:
                raise create_error("invalid_request", reason="top must be at least 1")

            breaker = SingleByteBreaker(self._request_config(data).create_pool())
            best = breaker.break_ciphertext(ciphertext)

            return jsonify({
                'answer': best.to_dict(),
                'results': [r.to_dict() for r in breaker.get_top_results(top_n)]
            })

        @self.app.route('/api/xor/repeating', methods=['POST'])
        def xor_repeating():
            """Repeating-key XOR breaker"""
            data = self._json_body()
            ciphertext = self._ciphertext(data)

            breaker = RepeatingKeyBreaker(self._request_config(data))
            keysize = data.get('keysize')
            if keysize is not None:
                answer = breaker.solve_keysize(ciphertext, self._int_field(data, "keysize"))
            else:
                answer = breaker.break_ciphertext(ciphertext)

            return jsonify({
                'answer': answer.to_dict(),
                'candidates': [c.to_dict() for c in breaker.candidates],
                'answers': [a.to_dict() for a in breaker.answers]
            })

    def start(self, port: int = 8080, debug: bool = False):
        """
        Start the Flask web server.

        Args:
            port: Port number to listen on
            debug: Enable debug mode
        """
        self.port = port
        logger.info(f"Starting xorbreak API on http://localhost:{port}")
        self.app.run(host='127.0.0.1', port=port, debug=debug)


def create_app(config: Optional[BreakerConfig] = None) -> Flask:
    """Application factory for WSGI servers and tests"""
    return BreakerWebServer(config).app
