"""
WSGI entry point for production deployment
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from payplanner.main import PayPlannerApp

# Create application for production
app_instance = PayPlannerApp('production')

# Create tables and default lookup rows
app_instance.initialize_database()

# Export the Flask app for WSGI servers
app = app_instance.app

if __name__ == '__main__':
    # For local testing
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', 5000)))
