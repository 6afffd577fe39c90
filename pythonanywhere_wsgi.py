import sys
import os

# Add your project directory to the sys.path
project_home = os.environ.get('COSTING_HOME', '/home/YOUR_USERNAME/menu-costing')
if project_home not in sys.path:
    sys.path.insert(0, project_home)

# Set the working directory
os.chdir(project_home)

from app import create_app, init_db

application = create_app(os.environ.get('FLASK_ENV', 'production'))
init_db(application)
