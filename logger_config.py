import logging
import os
from datetime import datetime
import glob


def clear_logs(log_dir="logs"):
    """Clear all existing log files before starting a new session"""
    if not os.path.exists(log_dir):
        return 0

    removed_count = 0
    for log_file in glob.glob(os.path.join(log_dir, "grouping_*.log")):
        try:
            os.remove(log_file)
            removed_count += 1
        except OSError as e:
            logging.getLogger(__name__).warning(f"Could not remove {log_file}: {e}")
    return removed_count


class GroupingLogger:
    def __init__(self, log_dir="logs"):
        self.log_dir = log_dir
        os.makedirs(log_dir, exist_ok=True)

        # Create timestamp for this session with milliseconds for uniqueness
        self.session_timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]

        self.logger = logging.getLogger('bus_grouping')
        self.logger.setLevel(logging.DEBUG)

        # Clear existing handlers
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

        self.log_file = os.path.join(log_dir, f"grouping_{self.session_timestamp}.log")
        file_handler = logging.FileHandler(self.log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)

        formatter = logging.Formatter(
            '%(asctime)s | %(levelname)8s | %(funcName)20s:%(lineno)4d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

        # core.* module loggers share the session file
        self.core_logger = logging.getLogger('core')
        self.core_logger.setLevel(logging.DEBUG)
        for handler in self.core_logger.handlers[:]:
            handler.close()
            self.core_logger.removeHandler(handler)
        self.core_logger.addHandler(file_handler)

        self.log_session_start()

    def log_session_start(self):
        self.logger.info("=" * 80)
        self.logger.info("BUS GROUPING SESSION STARTED")
        self.logger.info(f"Session ID: {self.session_timestamp}")
        self.logger.info("=" * 80)

    def info(self, message):
        self.logger.info(message)

    def warning(self, message):
        self.logger.warning(message)

    def error(self, message, exc_info=False):
        self.logger.error(message, exc_info=exc_info)

    def debug(self, message):
        self.logger.debug(message)

    def log_request(self, point_count, max_size, min_size, linkage_method):
        self.logger.info(f"REQUEST - Points: {point_count}, Band: [{min_size}, {max_size}], Linkage: {linkage_method}")

    def log_iteration(self, loop, remaining):
        self.logger.info(f"ITERATION {loop} - Working set: {remaining} points")

    def log_cut_selected(self, loop, k, profile):
        self.logger.info(f"CUT SELECTED - Loop: {loop}, k: {k}, Largest group: {max(profile)}")
        self.logger.debug(f"Cut profile: {profile}")

    def log_group_committed(self, group, final=False):
        kind = "FINAL GROUP" if final else "GROUP COMMITTED"
        self.logger.info(f"{kind} - Loop: {group.loop}, Label: {group.label}, Size: {group.size}")
        self.logger.debug(f"  Members: {group.members}")

    def log_final_summary(self, total_points, groups, min_size, max_size):
        sizes = [group.size for group in groups]
        undersized = [group for group in groups if group.size < min_size]

        self.logger.info("=" * 80)
        self.logger.info("FINAL GROUPING SUMMARY")
        self.logger.info(f"Points: {sum(sizes)}/{total_points} grouped")
        self.logger.info(f"Groups created: {len(groups)}")
        if sizes:
            self.logger.info(f"Group sizes: min {min(sizes)}, max {max(sizes)}, "
                             f"mean seat use {sum(sizes) / (len(sizes) * max_size) * 100:.1f}%")

        for group in undersized:
            self.logger.warning(f"  Group loop {group.loop} label {group.label} below minimum: {group.size} < {min_size}")

        self.logger.info("=" * 80)

    def log_accounting_check(self, total_points, issues):
        """Log coverage audit of a result set"""
        self.logger.critical("POINT ACCOUNTING CHECK")
        self.logger.critical(f"Input points: {total_points}")
        if issues:
            for issue in issues:
                self.logger.critical(f"WARNING: {issue}")
        else:
            self.logger.critical("Point accounting verified")

    def close(self):
        for logger in (self.logger, self.core_logger):
            for handler in logger.handlers[:]:
                handler.close()
                logger.removeHandler(handler)


# Global logger instance and session tracking
grouping_logger = None
current_session_id = None


def get_logger(log_dir="logs"):
    global grouping_logger
    if grouping_logger is None:
        grouping_logger = GroupingLogger(log_dir)
    return grouping_logger


def reset_logger():
    """Reset logger for new session - only if not in an active session"""
    global grouping_logger

    # Don't reset if we're in the middle of a session
    if current_session_id is not None:
        return grouping_logger

    if grouping_logger is not None:
        grouping_logger.close()
    grouping_logger = None
    return None


def start_session(log_dir="logs", clear=False):
    """Start a new logging session"""
    global current_session_id

    if clear:
        clear_logs(log_dir)

    current_session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
    return get_logger(log_dir)


def end_session():
    """End the current logging session"""
    global current_session_id
    current_session_id = None
