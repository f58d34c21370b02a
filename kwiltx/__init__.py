from kwiltx.utils import logger, loggers

loggers.update_logger(logger)
