from VerifierComponents.LineClassifier import ClassifiedLine
from VerifierComponents.Symbols import MethodSignature, Variable


class ProgressReport:
    def __init__(self):
        self.current_phase_number = ""
        self.action_bar_message = ""


class ClassificationReport(ProgressReport):
    """
    Progress report for the line classification phase.
    Attributes:
        current_phase_number (str): The current phase number, automatically set to "1".
        current_line (int): The line being classified (1-based).
        classified_line (ClassifiedLine | None): The classification result for that line.
    """
    def __init__(self):
        super().__init__()
        self.current_phase_number = "1"
        self.current_line = 0
        self.classified_line : ClassifiedLine | None = None


class FirstPassReport(ProgressReport):
    """
    Progress report for the first pass (method signatures and global variables).
    Attributes:
        current_phase_number (str): The current phase number, automatically set to "2".
        current_line (int): The line being looked at (1-based).
        new_method (MethodSignature | None): Signature registered on this line, if any.
        new_variables (list): (name, Variable) pairs declared globally on this line.
        skipped_to_line (int | None): Closing line of a method body skipped by this pass.
    """
    def __init__(self):
        super().__init__()
        self.current_phase_number = "2"
        self.current_line = 0
        self.new_method : MethodSignature | None = None
        self.new_variables : list[tuple[str, Variable]] = []
        self.skipped_to_line : int | None = None


class SecondPassReport(ProgressReport):
    """
    Progress report for the second pass (method bodies).
    Attributes:
        current_phase_number (str): The current phase number, automatically set to "3".
        current_line (int): The line being validated (1-based).
        current_method (str): Name of the method whose body is being validated.
        scope_depth (int): Number of open frames after this line.
        looked_at_variables (list): (name, Variable) pairs declared, assigned or read on this line.
        globals_restored (bool): True on the report closing a method, after the global reset.
    """
    def __init__(self):
        super().__init__()
        self.current_phase_number = "3"
        self.current_line = 0
        self.current_method = ""
        self.scope_depth = 0
        self.looked_at_variables : list[tuple[str, Variable]] = []
        self.globals_restored = False
