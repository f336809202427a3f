#!/usr/bin/env python3
"""Entry point for the Sports Scheduler development server."""
import os
from sports_scheduler.app import create_app

config_name = os.environ.get('FLASK_ENV', 'development')
app = create_app(config_name)

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 3000))
    app.logger.info('Sports Scheduler starting on http://localhost:%s', port)
    app.run(host='0.0.0.0', port=port, debug=(config_name == 'development'))
