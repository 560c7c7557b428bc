#!/usr/bin/env python3
"""
Release Check Server

Simple Flask server to run release checks against the local repository.
"""

import sys
from pathlib import Path

# Add src directory to Python path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from flask import Flask, request, jsonify
from flask_cors import CORS
from pydantic import ValidationError

from release_check.api import ReleaseCheckAPI
from release_check.config import get_config
from release_check.exceptions import AllPrFetchesFailed, RefNotFoundError, ReleaseCheckError
from release_check.formatting import ReleaseReportFormatter
from release_check.models import EmptyDiff, ReleaseCheckRequest, ReleaseCheckResponse


def create_app(check_api=None, formatter=None):
    """Create the Flask app; the check API is built from config on first use when not given."""
    app = Flask(__name__)
    CORS(app)  # Enable CORS for frontend

    state = {'api': check_api}
    report_formatter = formatter or ReleaseReportFormatter()

    def get_api() -> ReleaseCheckAPI:
        if state['api'] is None:
            state['api'] = ReleaseCheckAPI.from_config(get_config())
        return state['api']

    @app.route('/api/v1/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'service': 'release-check',
            'version': '1.0.0'
        })

    @app.route('/api/v1/release-check', methods=['POST'])
    def release_check():
        """Run a release check."""
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return jsonify({
                'error': 'Request body must be a JSON object',
                'status': 'invalid_request'
            }), 400

        try:
            check_request = ReleaseCheckRequest(**data)
        except ValidationError as e:
            return jsonify({
                'error': str(e),
                'status': 'invalid_request'
            }), 400

        try:
            outcome = get_api().run_check(
                pr_urls=check_request.pr_urls,
                source_branch=check_request.source_branch,
                target_branch=check_request.target_branch,
                exclude_patterns=check_request.exclude_patterns,
            )
        except RefNotFoundError as e:
            return jsonify({
                'error': str(e),
                'status': 'ref_not_found'
            }), 404
        except AllPrFetchesFailed as e:
            return jsonify({
                'error': str(e),
                'status': 'pr_fetch_failed',
                'warnings': [str(w) for w in e.warnings]
            }), 502
        except ReleaseCheckError as e:
            return jsonify({
                'error': str(e),
                'status': 'failed'
            }), 500

        report = report_formatter.format(outcome) if check_request.format == 'markdown' else None

        if isinstance(outcome, EmptyDiff):
            response = ReleaseCheckResponse(
                status='no_changes',
                source_branch=outcome.source_branch,
                target_branch=outcome.target_branch,
                report=report,
            )
        else:
            result = outcome.to_dict()
            response = ReleaseCheckResponse(
                status='completed',
                source_branch=result['source_branch'],
                target_branch=result['target_branch'],
                pull_requests=result['pull_requests'],
                is_safe=result['is_safe'],
                total_examined=result['total_examined'],
                flagged_count=result['flagged_count'],
                merge_skipped=result['merge_skipped'],
                counts=result['counts'],
                warnings=result['warnings'],
                commits=result['commits'],
                created_at=result['created_at'],
                report=report,
            )

        return jsonify(response.model_dump())

    return app


app = create_app()


if __name__ == '__main__':
    config = get_config()
    print("🚀 Starting Release Check Server...")
    print("📍 Server will be available at: http://localhost:8000")
    print("📋 API Documentation:")
    print("   - Health Check: GET /api/v1/health")
    print("   - Release Check: POST /api/v1/release-check")

    app.run(
        host='0.0.0.0',
        port=8000,
        debug=config.debug
    )
