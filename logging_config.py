import logging
import os
import sys
from datetime import datetime

LOGGER_NAME = 'chart_generator'


def setup_logging(log_to_file=True, level=logging.INFO):
    """Sets up logging for the chart generator with proper Unicode support."""
    handlers = []

    if log_to_file:
        log_directory = "logs"
        if not os.path.exists(log_directory):
            os.makedirs(log_directory)

        # Create a unique log file name with timestamp
        log_filename = f"{log_directory}/charts_{datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}.log"
        handlers.append(logging.FileHandler(log_filename, encoding='utf-8'))

    # For console handler, handle encoding issues on Windows
    if sys.platform.startswith('win'):
        try:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.stream.reconfigure(encoding='utf-8')
        except (AttributeError, OSError):
            class SafeStreamHandler(logging.StreamHandler):
                def emit(self, record):
                    try:
                        super().emit(record)
                    except UnicodeEncodeError:
                        # Replace problematic characters and try again
                        msg = self.format(record)
                        safe_msg = msg.encode('ascii', errors='replace').decode('ascii')
                        print(safe_msg)
            console_handler = SafeStreamHandler(sys.stdout)
    else:
        console_handler = logging.StreamHandler()
    handlers.append(console_handler)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
    return logging.getLogger(LOGGER_NAME)
