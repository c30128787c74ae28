name = "dicelang"

from loguru import logger

# flake8: noqa
from .command import RollResponse, RollResult, roll_command
from .diceset import Dice, DiceSet, roll, totals_string, uniform
from .errors import (
    DiceLangError,
    ErrorKind,
    EvalError,
    LexError,
    ParseError,
    user_message,
)
from .interpreter import Interpreter, evaluate
from .parser import Parser, parse, print_ast
from .probability import probability
from .restring import format_faces, restring
from .tokens import Node

# silent unless the host asks for it, see logs.setup_logging
logger.disable(name)
