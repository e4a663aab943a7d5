"""Application entry point for the minimum password age service"""
import os

from minage.app import create_app

app = create_app(os.environ.get('FLASK_CONFIG', 'default'))

if __name__ == "__main__":
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000)
