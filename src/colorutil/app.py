from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from .blend import (
    MAX_STEPS,
    blend_color,
    insert_color,
    opacity_mix,
    overlay_mix,
    soft_light_mix,
    step_color,
    tint_color,
    transition_steps,
)
from .color import (
    Brightness,
    Color,
    color_from_hex,
    known_color_names,
    random_color,
    to_hex,
)
from .errors import InvalidArgument, InvalidFormat

log = logging.getLogger(__name__)

DEFAULT_CONFIG: Mapping[str, Any] = {
    "COLORUTIL_MAX_STEPS": MAX_STEPS,
    "COLORUTIL_DEFAULT_STEPS": 21,
}

# mode → (base, blend, opacity) → Color
MIX_MODES: Mapping[str, Callable[[Color, Color, int], Color]] = {
    "insert": lambda a, b, _op: insert_color(a, b),
    "opacity": opacity_mix,
    "overlay": overlay_mix,
    "softlight": soft_light_mix,
}


def supported_modes() -> tuple[str, ...]:
    return tuple(["blend"] + list(MIX_MODES.keys()))


def _int_arg(name: str, default: Optional[int] = None) -> int:
    raw = request.args.get(name)
    if raw is None:
        if default is None:
            raise InvalidArgument(f"{name} is required")
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidArgument(f"{name} must be an integer") from None


def _color_arg(name: str, default: str) -> Color:
    return color_from_hex(request.args.get(name, default))


# ----------------------------- Flask app ----------------------------------


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    if config:
        app.config.update(config)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    @app.errorhandler(InvalidFormat)
    @app.errorhandler(InvalidArgument)
    def bad_input(exc):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(Exception)
    def failure(exc):
        if isinstance(exc, HTTPException):
            return exc
        log.exception("Request failed")
        return jsonify({"error": str(exc)}), 500

    @app.route("/mix")
    def mix():
        a = _color_arg("a", "#ff0000")
        b = _color_arg("b", "#0000ff")
        mode = (request.args.get("mode") or "opacity").lower()
        if mode not in supported_modes():
            return (
                jsonify(
                    {
                        "error": f"unknown mode '{mode}'",
                        "supported": supported_modes(),
                    }
                ),
                400,
            )
        if mode == "blend":
            alpha = request.args.get("alpha")
            result = blend_color(a, b, None if alpha is None else _int_arg("alpha"))
        else:
            result = MIX_MODES[mode](a, b, _int_arg("opacity", 50))
        return jsonify({"color": to_hex(result)})

    @app.route("/transition")
    def transition():
        a = _color_arg("a", "#ff0000")
        b = _color_arg("b", "#0000ff")
        n = _int_arg("n", app.config["COLORUTIL_DEFAULT_STEPS"])
        steps = transition_steps(a, b, n, max_steps=app.config["COLORUTIL_MAX_STEPS"])
        return jsonify([to_hex(c) for c in steps])

    @app.route("/tint")
    def tint():
        color = _color_arg("color", "#808080")
        raw = (request.args.get("direction") or "darker").lower()
        try:
            direction = Brightness(raw)
        except ValueError:
            raise InvalidArgument(f"unknown tint direction '{raw}'") from None
        amount = _int_arg("amount", 25)
        return jsonify({"color": to_hex(tint_color(direction, color, amount))})

    @app.route("/step")
    def step():
        color = _color_arg("color", "#808080")
        return jsonify({"color": to_hex(step_color(color, _int_arg("percent", 100)))})

    @app.route("/random")
    def random():
        return jsonify({"color": to_hex(random_color())})

    @app.route("/names")
    def names():
        return jsonify(known_color_names())

    return app


if __name__ == "__main__":
    create_app().run(debug=False, threaded=True)
