"""
Development entry point for the PayPlanner API
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from payplanner.main import PayPlannerApp

def main():
    """Main function to run the development server"""
    app = PayPlannerApp('development')
    app.initialize_database()

    app.app.logger.info("PayPlanner API starting in development mode on port %s", os.getenv('PORT', 5000))

    app.run(
        debug=True,
        host='0.0.0.0',
        port=int(os.getenv('PORT', 5000))
    )

if __name__ == '__main__':
    main()
