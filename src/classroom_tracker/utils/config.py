import os
from dotenv import load_dotenv

load_dotenv()

# Simulated latencies in seconds
WORK_DELAY = float(os.getenv('WORK_DELAY', '0.5'))
GRADING_DELAY = float(os.getenv('GRADING_DELAY', '0.5'))

# Run loop polling interval in seconds
POLL_INTERVAL = float(os.getenv('POLL_INTERVAL', '0.1'))

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
