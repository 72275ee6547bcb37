"""
Flask web application for the bracket manager.
"""
import logging
from datetime import datetime
from flask import Flask, request, jsonify, Response
from bracket.editor import EditSession
from bracket import config
from bracket.errors import (
    ValidationError, PersistenceError, PartialUpdateError, DataIntegrityError, ConfigurationError
)
from bracket.generator import parse_entrants
from bracket.service import BracketManager

app = Flask(__name__)

DATA_DIR = config.DATA_DIR

if not app.debug:
    app.logger.setLevel(logging.INFO)


def get_manager() -> BracketManager:
    """Manager bound to the current data directory."""
    return BracketManager(DATA_DIR)


@app.errorhandler(ValidationError)
def handle_validation_error(e):
    return jsonify({'error': str(e)}), 400


@app.errorhandler(DataIntegrityError)
def handle_data_integrity_error(e):
    app.logger.warning(f'Bracket data problem: {e}')
    return jsonify({'error': str(e), 'setup_required': True}), 409


@app.errorhandler(ConfigurationError)
def handle_configuration_error(e):
    app.logger.error(f'Configuration problem: {e}')
    return jsonify({'error': f'Server misconfigured: {e}'}), 500


@app.errorhandler(PersistenceError)
def handle_persistence_error(e):
    app.logger.error(f'Persistence failure: {e}')
    body = {'error': str(e)}
    if isinstance(e, PartialUpdateError):
        body['completed_steps'] = e.completed
        body['failed_step'] = e.failed
    return jsonify(body), 500


@app.route('/api/matches')
def api_list_matches():
    """All matches of the live bracket, by round then position."""
    matches = get_manager().list_matches()
    return jsonify({'matches': [m.to_dict() for m in matches]})


@app.route('/api/bracket')
def api_bracket():
    """Bracket summary grouped by round, with the champion once decided."""
    return jsonify(get_manager().bracket_display())


@app.route('/api/bracket/generate', methods=['POST'])
def api_generate_bracket():
    """Discard the live bracket and generate a new one from a team list."""
    data = request.get_json(silent=True) or {}
    teams = data.get('teams')
    if isinstance(teams, str):
        teams = parse_entrants(teams)
    elif isinstance(teams, list):
        teams = [str(t).strip() for t in teams if t is not None and str(t).strip()]
    else:
        return jsonify({'error': 'Missing team names'}), 400

    slot_count = data.get('slot_count')
    if slot_count is not None:
        try:
            slot_count = int(slot_count)
        except (TypeError, ValueError):
            return jsonify({'error': 'slot_count must be a whole number'}), 400

    manager = get_manager()
    matches = manager.generate(teams, slot_count=slot_count, tournament_name=data.get('tournament_name'))
    app.logger.info(f'Generated bracket with {len(teams)} teams')
    return jsonify({
        'success': True,
        'tournament_name': manager.tournament_name,
        'total_matches': len(matches),
    })


@app.route('/api/matches/<identifier>')
def api_match_for_edit(identifier):
    """Editable state of one match."""
    return jsonify(get_manager().load_for_edit(identifier))


@app.route('/api/matches/<identifier>/result', methods=['POST'])
def api_save_result(identifier):
    """Save scores and winner for a match and advance the winner."""
    data = request.get_json(silent=True) or {}
    session = EditSession(identifier, data.get('winner'))
    match = get_manager().submit_result(session, data.get('score1'), data.get('score2'))
    return jsonify({'success': True, 'match': match.to_dict()})


@app.route('/api/matches/<identifier>/bye', methods=['POST'])
def api_declare_bye(identifier):
    """Complete a match as a walkover."""
    data = request.get_json(silent=True) or {}
    session = EditSession(identifier, data.get('winner'))
    match = get_manager().declare_bye(session)
    return jsonify({'success': True, 'match': match.to_dict()})


@app.route('/api/matches/<identifier>/reset', methods=['POST'])
def api_reset_match(identifier):
    """Clear a match result and the slot it filled in the next round."""
    match = get_manager().reset_match(EditSession(identifier))
    return jsonify({'success': True, 'match': match.to_dict()})


@app.route('/api/export/bracket-csv')
def api_export_bracket_csv():
    """Download all matches as CSV."""
    csv_text = get_manager().export_csv()
    filename = f"bracket_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
    return Response(
        csv_text,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={filename}'}
    )


@app.route('/api/actions')
def api_actions():
    """Administrative action log, newest first."""
    actions = get_manager().actions.load()
    return jsonify({'actions': list(reversed(actions))})


if __name__ == '__main__':
    app.run(debug=True)
