# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    MAIN - Load configs and initialize logging
#    © 2026 October - 1200 Web Development <http://1200wd.com/>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU Affero General Public License as
#    published by the Free Software Foundation, either version 3 of the
#    License, or (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU Affero General Public License for more details.
#
#    You should have received a copy of the GNU Affero General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

# Do not remove any of the imports below, used by other files
import os
import sys
import logging
from logging.handlers import RotatingFileHandler
from zeepinlib.config.config import *


# Initialize logging
logger = logging.getLogger('zeepinlib')
logger.setLevel(LOGLEVEL)

if ENABLE_ZEEPINLIB_LOGGING:
    handler = RotatingFileHandler(str(ZPL_LOG_FILE), maxBytes=100 * 1024 * 1024, backupCount=2)
    formatter = logging.Formatter('%(asctime)s %(levelname)s %(funcName)s(%(lineno)d) %(message)s',
                                  datefmt='%Y/%m/%d %H:%M:%S')
    handler.setFormatter(formatter)
    handler.setLevel(LOGLEVEL)
    logger.addHandler(handler)

    logger.info('WELCOME TO ZEEPINLIB - ZEEPINCHAIN TRANSACTION SIGNING LIBRARY')
    logger.info('Version: %s' % ZEEPINLIB_VERSION)
    logger.info('Read config from: %s' % ZPL_CONFIG_FILE)
    logger.info('Logging to: %s' % ZPL_LOG_FILE)
    logger.info('Directory for data files: %s' % ZPL_DATA_DIR)


def set_loglevel(level):
    """
    Change the log level of the library logger and its handlers at runtime. Used by the command line tools.

    :param level: Log level name or number, i.e. 'DEBUG' or logging.INFO
    :type level: str, int
    """
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    for h in logger.handlers:
        h.setLevel(level)
