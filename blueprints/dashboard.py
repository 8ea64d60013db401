from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from blueprints.rsvp import list_rsvps
from utils.rsvp_metrics import summarize, build_timeline, filter_entries

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')


def fetch_rsvp_snapshot():
    """
    I/O phase: ``(error_message, records)`` with records newest-first.

    A failed fetch is reported as an empty snapshot so the aggregation phase
    never sees an error state.
    """
    try:
        return None, [item.to_dict() for item in list_rsvps()]
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to fetch RSVP data: {e}")
        return 'Unable to load RSVP data right now.', []


@dashboard_bp.route('/summary', methods=['GET'])
def get_summary():
    error, records = fetch_rsvp_snapshot()

    # 纯计算阶段
    metrics = summarize(records)
    timeline = build_timeline(records)
    entries = filter_entries(
        records,
        status=request.args.get('status'),
        query=request.args.get('q', ''),
    )

    return jsonify({
        'metrics': metrics.to_dict(),
        'timeline': [bucket.to_dict() for bucket in timeline],
        'entries': entries,
        'error': error,
    })
