'''
Service endpoints used by load balancers and deployment tooling
'''
import json
import os.path

from flask import Blueprint, current_app, jsonify
from flask.wrappers import Response

import invoicer

service = Blueprint('service', __name__)

@service.route('/__heartbeat__')
def get_heartbeat():
    return Response('I am alive', mimetype='text/plain')

@service.route('/__version__')
def get_version():
    '''
    Returns the version of the running application.
    A version file produced by the build takes precedence over the config
    '''
    version_file = current_app.config.get('VERSION_FILE')
    if version_file and os.path.exists(version_file):
        with open(version_file, encoding='utf-8') as file:
            return jsonify(json.load(file))
    return jsonify({
        'source': current_app.config.get('VERSION_SOURCE'),
        'version': invoicer.__version__,
        'commit': current_app.config.get('VERSION_COMMIT') or os.environ.get('INVOICER_COMMIT'),
        'build': current_app.config.get('VERSION_BUILD')
    })
