"""Flask web application exposing job postings and the scraper."""

import logging
from flask import Flask, jsonify, request
from typing import Optional

from config.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from database import (
    InvalidStatusError, get_jobs, get_job, update_job, deactivate_job, get_job_stats
)
from scraper.scheduler import scheduler, ScrapeInProgressError
from scraper.sources import SOURCE_NAMES

# Configure logging with datetime prefix
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

app = Flask(__name__)


def _int_arg(name: str, default: Optional[int] = None, minimum: int = 0) -> Optional[int]:
    """Read an integer query parameter, falling back to the default when invalid."""
    value = request.args.get(name)
    if value is None or value == '':
        return default
    try:
        return max(int(value), minimum)
    except ValueError:
        return default


@app.route('/api/jobs', methods=['GET'])
def api_get_jobs():
    """Get job postings with optional filters and pagination."""
    try:
        days = _int_arg('days')
        page = _int_arg('page', 1, minimum=1)
        limit = min(_int_arg('limit', DEFAULT_PAGE_SIZE, minimum=1), MAX_PAGE_SIZE)
        include_inactive = request.args.get('include_inactive', 'false').lower() == 'true'

        source = request.args.get('source') or None
        if source and source not in SOURCE_NAMES:
            return jsonify({
                'success': False,
                'error': f"Unknown source '{source}', expected one of: {', '.join(SOURCE_NAMES)}"
            }), 400

        jobs, total = get_jobs(
            days=days,
            status=request.args.get('status') or None,
            company=request.args.get('company') or None,
            location=request.args.get('location') or None,
            source=source,
            include_inactive=include_inactive,
            limit=limit,
            offset=(page - 1) * limit
        )

        return jsonify({
            'success': True,
            'count': len(jobs),
            'total': total,
            'page': page,
            'limit': limit,
            'jobs': jobs
        })
    except Exception as e:
        logger.error(f"Error in api_get_jobs: {e}", exc_info=True)
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/jobs/scrape', methods=['GET'])
def api_scrape_jobs():
    """Run a scrape cycle synchronously and return its summary."""
    try:
        logger.info("Scraping triggered from web interface")
        results = scheduler.trigger_manual_scrape()
        return jsonify({
            'success': True,
            'message': f"Scraping complete: {results['new_jobs']} new jobs, {results['total_jobs']} found",
            **results
        })
    except ScrapeInProgressError as e:
        return jsonify({
            'success': False,
            'error': str(e)
        }), 409
    except Exception as e:
        logger.error(f"Error in api_scrape_jobs: {e}", exc_info=True)
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/jobs/stats', methods=['GET'])
def api_get_stats():
    """Get posting counts by status, source, company and day."""
    try:
        return jsonify({
            'success': True,
            'stats': get_job_stats()
        })
    except Exception as e:
        logger.error(f"Error in api_get_stats: {e}", exc_info=True)
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/jobs/<int:job_id>', methods=['GET'])
def api_get_job(job_id: int):
    """Get a single job by ID."""
    try:
        job = get_job(job_id)
        if job:
            return jsonify({
                'success': True,
                'job': job
            })
        return jsonify({
            'success': False,
            'error': 'Job not found'
        }), 404
    except Exception as e:
        logger.error(f"Error in api_get_job: {e}", exc_info=True)
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/jobs/<int:job_id>', methods=['PUT'])
def api_update_job(job_id: int):
    """Update the status or notes of a job."""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({
                'success': False,
                'error': 'No data provided'
            }), 400

        changes = {key: data[key] for key in ('status', 'notes') if key in data}
        if not changes:
            return jsonify({
                'success': False,
                'error': 'Only status and notes can be updated'
            }), 400

        if not get_job(job_id):
            return jsonify({
                'success': False,
                'error': 'Job not found'
            }), 404

        if update_job(job_id, changes):
            return jsonify({
                'success': True,
                'job': get_job(job_id)
            })
        return jsonify({
            'success': False,
            'error': 'Failed to update job'
        }), 500
    except InvalidStatusError as e:
        return jsonify({
            'success': False,
            'error': str(e)
        }), 400
    except Exception as e:
        logger.error(f"Error in api_update_job: {e}", exc_info=True)
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/jobs/<int:job_id>', methods=['DELETE'])
def api_delete_job(job_id: int):
    """Soft-delete a job."""
    try:
        if not get_job(job_id):
            return jsonify({
                'success': False,
                'error': 'Job not found'
            }), 404
        if deactivate_job(job_id):
            return jsonify({'success': True})
        return jsonify({
            'success': False,
            'error': 'Failed to delete job'
        }), 500
    except Exception as e:
        logger.error(f"Error in api_delete_job: {e}", exc_info=True)
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@app.route('/api/scheduler', methods=['GET'])
def api_scheduler_status():
    """Report whether the daily scheduler is running and when it fires next."""
    return jsonify({
        'success': True,
        'scheduler': scheduler.status()
    })


def run_web_server(host='127.0.0.1', port=5000, debug=False, start_scheduler=True):
    """Run the Flask web server."""
    if start_scheduler:
        scheduler.start()
    logger.info(f"Starting web server on http://{host}:{port}")
    try:
        # The reloader would start a second scheduler in the child process
        app.run(host=host, port=port, debug=debug, use_reloader=False)
    finally:
        scheduler.stop()
