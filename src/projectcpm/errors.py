class ScheduleError(Exception): pass


class InvalidDateInput(ScheduleError, ValueError): pass


class InvertedDateRange(ScheduleError, ValueError): pass


class DanglingDependencyReference(ScheduleError, KeyError):
    def __str__(self):
        return str(self.args[0]) if self.args else ''


class SelfDependencyError(ScheduleError, ValueError): pass


class CycleError(ScheduleError): pass


class DragStateError(ScheduleError, RuntimeError): pass


class ConfigError(ScheduleError, ValueError): pass
