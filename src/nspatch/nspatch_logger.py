"""
Logging utilities for nspatch.
"""

import inspect
import json
import logging
from datetime import datetime

from pydantic import BaseModel


class LogLine(BaseModel):
    """
    Represents a line in the nspatch log
    """

    time: str
    level: str
    caller_file: str
    caller_name: str
    caller_line: int
    message: str


class NspatchLogger:
    """
    Logger class
    """

    def __init__(self, json_output: bool = False, level: int = logging.INFO) -> None:
        self.logger = logging.getLogger("nspatch")
        self.logger.setLevel(level)
        self.json_output = json_output

    def log(self, debug_message: str, level: int) -> None:
        """
        Log the message using the logger
        """
        if not self.json_output:
            self.logger.log(level=level, msg=debug_message)
            return

        debug_message = debug_message.replace("\n", " ")

        # Collect details about the callee
        curframe = inspect.currentframe()
        calframe = inspect.getouterframes(curframe, 2)
        caller_file = calframe[1][1].replace("\\", "/").split("/")[-1]
        caller_line = calframe[1][2]
        caller_name = calframe[1][3]

        log_line = LogLine(
            time=str(datetime.now()),
            level=logging.getLevelName(level),
            caller_file=caller_file,
            caller_name=caller_name,
            caller_line=caller_line,
            message=debug_message,
        )

        self.logger.log(level=level, msg=json.dumps(log_line.model_dump()))
