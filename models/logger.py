import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s:%(lineno)d] - %(message)s"


def init_logging(app):
    """Configure global logging for the entire Flask app."""
    log_level = app.config.get('LOG_LEVEL', 'INFO').upper()
    numeric_level = getattr(logging, log_level, logging.INFO)

    handlers = [logging.StreamHandler()]
    log_file = app.config.get('LOG_FILE')
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, handlers=handlers)

    app.logger.setLevel(numeric_level)
    app.logger.info("Logging initialized at %s level", log_level)
