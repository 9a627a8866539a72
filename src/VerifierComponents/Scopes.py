from VerifierComponents.Symbols import MethodSignature, Variable, VariableTable


class ScopeStack:
    """Nested local frames of one method body, layered over the globals.

    Frames are plain dicts kept in a list, innermost last. Each open block
    owns exactly one frame: the method body is frame 0 and every ``if`` or
    ``while`` block pushes one more. Lookups walk the frames from the
    innermost outwards and fall back to the global table.
    """

    def __init__(self, globals_table: VariableTable):
        self.globals = globals_table
        self.frames: list[VariableTable] = []

    @classmethod
    def for_method(
        cls, signature: MethodSignature, globals_table: VariableTable
    ) -> "ScopeStack":
        """Fresh stack with the method-body frame holding the parameters."""
        scope = cls(globals_table)
        scope.push_frame()
        for param in signature.parameters:
            scope.declare(
                param.name,
                Variable(param.var_type, is_final=param.is_final, initialized=True),
            )
        return scope

    @property
    def depth(self) -> int:
        return len(self.frames)

    def push_frame(self) -> None:
        self.frames.append({})

    def pop_frame(self) -> bool:
        """Drop the innermost frame. Returns False if there was none to drop."""
        if not self.frames:
            return False
        self.frames.pop()
        return True

    def declare(self, name: str, variable: Variable) -> bool:
        """Declare in the innermost frame. False on a duplicate or with no frame."""
        if not self.frames or name in self.frames[-1]:
            return False
        self.frames[-1][name] = variable
        return True

    def is_declared_in_current_frame(self, name: str) -> bool:
        return bool(self.frames) and name in self.frames[-1]

    def resolve(self, name: str) -> Variable | None:
        for frame in reversed(self.frames):
            if name in frame:
                return frame[name]
        return self.globals.get(name)

    def __len__(self) -> int:
        return len(self.frames)


def resolve_variable(
    name: str, globals_table: VariableTable, scope: ScopeStack | None
) -> Variable | None:
    """Resolve through the scope when inside a method body, else the globals."""
    if scope is not None:
        return scope.resolve(name)
    return globals_table.get(name)
