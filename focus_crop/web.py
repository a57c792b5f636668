"""
HTTP interface for focus-crop.

A small Flask app that runs crops on files the server can see and reports
progress. Endpoints:

    GET  /api/status              current state as JSON
    POST /api/crop                {"path": ..., "sizes": [...], "options": {...}}
    GET  /api/output/<index>      send one file produced by the last crop

There is no authentication and clients choose input paths and output
directories, so the server listens on 127.0.0.1 unless told otherwise.
"""
import logging
import threading
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, request, send_file

from focus_crop.config import FocusCropConfig
from focus_crop.errors import (
    ConfigurationError,
    InvalidCropGeometry,
    InvalidSizeSpec,
    SourceNotFound,
    UnsupportedFileType,
)
from focus_crop.imaging.backend import ImageBackend
from focus_crop.orchestrator import process
from focus_crop.progress import ProgressTracker

# Disable Flask development server request logging
log = logging.getLogger('werkzeug')
log.setLevel(logging.ERROR)

DEFAULT_PORT = 8765
DEFAULT_HOST = '127.0.0.1'

ERROR_STATUS = (
    (SourceNotFound, 404),
    (UnsupportedFileType, 415),
    (InvalidSizeSpec, 400),
    (ConfigurationError, 400),
    (InvalidCropGeometry, 500),
)


def status_for_error(error: Exception) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 500


class AppState:
    """Shared state between request handlers"""
    def __init__(self):
        self.status = "idle"
        self.source = None
        self.total_sizes = 0
        self.completed_sizes = 0
        self.percent = 0
        self.outputs = []
        self.error = None
        self.lock = threading.Lock()

    def update(self, **kwargs):
        """Thread-safe update of state"""
        with self.lock:
            for key, value in kwargs.items():
                setattr(self, key, value)

    def get(self, key):
        """Thread-safe get of state value"""
        with self.lock:
            return getattr(self, key)

    def get_dict(self):
        """Get a thread-safe copy of state as dict"""
        with self.lock:
            return {
                'status': self.status,
                'source': self.source,
                'total_sizes': self.total_sizes,
                'completed_sizes': self.completed_sizes,
                'percent': self.percent,
                'outputs': [
                    {
                        'index': i,
                        'size': o['size'],
                        'path': o['path'],
                        'shift_x': o['shift_x'],
                        'shift_y': o['shift_y'],
                        'elapsed_ms': o['elapsed_ms'],
                    }
                    for i, o in enumerate(self.outputs)
                ],
                'error': self.error,
            }


def _describe(result) -> dict:
    offset = result.job.crop_offset
    return {
        'size': result.size_token,
        'path': str(result.output_path),
        'shift_x': offset.shift_x,
        'shift_y': offset.shift_y,
        'elapsed_ms': result.elapsed_ms,
    }


def create_app(state: AppState, backend: Optional[ImageBackend] = None) -> Flask:
    """Create the Flask app bound to a state object and imaging backend"""
    app = Flask(__name__)
    crop_lock = threading.Lock()

    @app.route('/api/status')
    def api_status():
        """Status API endpoint"""
        return jsonify(state.get_dict())

    @app.route('/api/crop', methods=['POST'])
    def api_crop():
        """Run a crop synchronously and report the outputs"""
        payload = request.get_json(silent=True) or {}
        path = payload.get('path')
        sizes = payload.get('sizes')
        if sizes is not None and not isinstance(sizes, list):
            return jsonify({'error': 'sizes must be a list'}), 400

        try:
            config = FocusCropConfig.from_options(payload.get('options'))
        except (ValueError, TypeError) as e:
            return jsonify({'error': str(e)}), 400

        # Sizes run strictly one request at a time
        with crop_lock:
            state.update(status='processing', source=path, total_sizes=len(sizes or []) or 1,
                         completed_sizes=0, percent=0, outputs=[], error=None)

            tracker = ProgressTracker(total=state.get('total_sizes'))

            def on_progress(current, total):
                tracker.update(current, total)
                state.update(completed_sizes=tracker.current, total_sizes=tracker.total,
                             percent=tracker.percent)

            outcome = {}
            results = process(
                path, sizes, config.with_overrides(quiet=True), backend=backend,
                callback=lambda error: outcome.update(error=error),
                progress_callback=on_progress,
            )
            outputs = [_describe(r) for r in results]
            error = outcome.get('error')

            if error is not None:
                state.update(status='error', outputs=outputs, error=str(error))
                return jsonify({'error': str(error), 'outputs': outputs}), status_for_error(error)

            state.update(status='done', outputs=outputs)
            return jsonify({'outputs': outputs})

    @app.route('/api/output/<int:index>')
    def api_output(index):
        """Serve one produced file"""
        outputs = state.get('outputs')
        if 0 <= index < len(outputs):
            return send_file(Path(outputs[index]['path']).resolve())
        return "Not found", 404

    return app


def run_flask_server(app: Flask, port: int = DEFAULT_PORT, host: str = DEFAULT_HOST):
    """Run Flask server (blocking)"""
    app.run(host=host, port=port, debug=False, use_reloader=False)
