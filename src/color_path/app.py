from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np
from flask import Flask, Response, jsonify, request

from .errors import PaletteError
from .export import export_value, palette_hex, to_css_variables, to_hex, to_svg
from .generators import random_hsl_pair
from .position_functions import available_functions
from .query_state import PaletteState, decode_state, encode_state

log = logging.getLogger(__name__)

DEFAULT_CONFIG: Mapping[str, Any] = {
    "MAX_STEPS": 512,
    "DEFAULT_STEPS": 16,
    "DEFAULT_MODEL": "okhsl",
}


def state_from_request(args: Mapping[str, str], max_steps: int, default_steps: int) -> PaletteState:
    """Decode query args; a missing ``anchors`` gets a random pair (seeded by ``seed``)."""
    params = dict(args)
    params.setdefault("steps", str(default_steps))
    if not params.get("anchors"):
        seed: int | None = int(params["seed"]) if params.get("seed") else None
        pair = random_hsl_pair(rng=np.random.default_rng(seed))
        params["anchors"] = "[" + ",".join(f"[{h},{s},{l}]" for h, s, l in pair) + "]"
    state = decode_state(params)
    state.steps = max(1, min(state.steps, max_steps))
    return state


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    if config:
        app.config.update(config)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    def build():
        state = state_from_request(
            request.args, app.config["MAX_STEPS"], app.config["DEFAULT_STEPS"]
        )
        if not request.args.get("model"):
            state.model = app.config["DEFAULT_MODEL"]
        palette = state.build()
        shift = request.args.get("hueShift")
        if shift:
            palette.shift_hue(float(shift))
        return state, palette

    @app.route("/functions")
    def functions():
        return jsonify(list(available_functions()))

    @app.route("/palette")
    def palette():
        try:
            state, pal = build()
            colors = pal.colors()
            body = {
                "colors": [to_hex(c, state.model) for c in colors],
                "export": [export_value(c, state.model) for c in colors],
                "hsl": [list(c) for c in colors],
                "anchors": [list(c) for c in pal.anchor_colors],
                "query": encode_state(pal, state.model),
            }
        except (PaletteError, ValueError) as e:
            return jsonify({"error": str(e)}), 400
        except Exception as exc:
            log.exception("Palette generation failed")
            return jsonify({"error": str(exc)}), 500
        return jsonify(body)

    @app.route("/palette/css")
    def palette_css():
        try:
            state, pal = build()
            body = to_css_variables(palette_hex(pal, state.model), request.args.get("title", "Palette"))
        except (PaletteError, ValueError) as e:
            return jsonify({"error": str(e)}), 400
        return Response(body, mimetype="text/css")

    @app.route("/palette/svg")
    def palette_svg():
        try:
            state, pal = build()
            body = to_svg(palette_hex(pal, state.model))
        except (PaletteError, ValueError) as e:
            return jsonify({"error": str(e)}), 400
        return Response(body, mimetype="image/svg+xml")

    @app.route("/color-at")
    def color_at():
        try:
            t = float(request.args.get("t", 0.0))
        except ValueError:
            return jsonify({"error": "t must be a number"}), 400
        try:
            state, pal = build()
            t = min(1.0, max(0.0, t))
            hsl = pal.get_color_at(t)
            body = {"t": t, "hsl": list(hsl), "hex": to_hex(hsl, state.model)}
        except (PaletteError, ValueError) as e:
            return jsonify({"error": str(e)}), 400
        except Exception as exc:
            log.exception("color-at failed")
            return jsonify({"error": str(exc)}), 500
        return jsonify(body)

    return app
