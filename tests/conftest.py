"""
Pytest configuration and shared fixtures for forge tests.
"""

import json
import sys
import textwrap
import types
from pathlib import Path

import pytest

from forge.compiler import compile_definition
from forge.typing.model import CompiledModel

BRIDGE_SOURCE = textwrap.dedent(
    '''
    """Bridge component used across the test suite."""

    import json
    from dataclasses import dataclass, field
    from typing import Optional

    import bridge_core.codecs
    from bridge_core import events
    from bridge_core.ownable import Ownable
    from bridge_core.types import Deposit, PendingWithdrawal, WithdrawalId
    from bridge_core.types import SetU64 as SetLimit
    from forge import MutRef, Ref, custom, decode_output, encode_input, expose, feeds, view
    from forge_runtime import abi


    @expose("owner", "transfer_ownership", "renounce_ownership")
    class OwnableImpl(Ownable):
        def owner(self) -> Optional[str]:
            """Returns the current owner."""
            ...

        def transfer_ownership(self, new_owner: str) -> None:
            ...

        def renounce_ownership(self) -> None:
            pass

        def _check_owner(self) -> None:
            ...


    class Pausable:
        @view
        def is_paused(self) -> bool:
            return self.paused

        def pause(self) -> None:
            self.paused = True
            abi.emit(events.PauseToggled.PAUSED, events.PauseToggled())

        def unpause(self) -> None:
            self.paused = False
            abi.emit("unpaused", events.PauseToggled())


    @dataclass
    class Bridge(Pausable, OwnableImpl):
        paused: bool = False
        deposits: list = field(default_factory=list)
        pending: dict = field(default_factory=dict)
        period: int = 0

        @staticmethod
        def new() -> "Bridge":
            return Bridge()

        def init(self, owner: str) -> None:
            self.owner_address = owner

        def deposit(self, deposit: Deposit) -> None:
            """Deposit funds into the bridge.

            Emits a deposit event.
            """
            self.deposits.append(deposit)
            abi.emit("deposit", Deposit(deposit.amount))

        def set_period(self, period: int, limit: SetLimit) -> None:
            self.period = period

        @view
        def deposit_count(self) -> int:
            return len(self.deposits)

        @view
        def latest(self) -> Ref[Deposit]:
            return self.deposits[-1]

        def record(self, deposit: Ref[Deposit], amount: MutRef[int]) -> None:
            self.deposits.append(deposit)

        @view
        @feeds("tuple[WithdrawalId, PendingWithdrawal]")
        def pending_withdrawals(self) -> None:
            for withdrawal_id, withdrawal in self.pending.items():
                abi.feed((withdrawal_id, withdrawal))

        @view
        @feeds("WithdrawalId")
        def withdrawal_ids(self) -> None:
            for withdrawal_id in self.pending:
                abi.feed(WithdrawalId(withdrawal_id))

        @custom
        def raw_call(self, data: bytes) -> bytes:
            return data

        def _total(self) -> int:
            return sum(d.amount for d in self.deposits)


    @encode_input("extra_data")
    def encode_extra_data(json_text: str) -> bytes:
        return bridge_core.codecs.pack(json.loads(json_text))


    @decode_output("extra_data")
    def decode_extra_data(data: bytes) -> str:
        return json.dumps(bridge_core.codecs.unpack(data))
    '''
)

COUNTER_SOURCE = textwrap.dedent(
    '''
    import json
    from dataclasses import dataclass, field

    import fake_boundary as abi
    from forge import Ref, custom, decode_output, expose, feeds, view


    class Resettable:
        def reset(self) -> None:
            self.value = 0

        @staticmethod
        def version() -> str:
            return "1.0"


    @expose("reset", "version")
    class ResettableImpl(Resettable):
        def reset(self) -> None:
            ...

        @staticmethod
        def version() -> str:
            ...


    @dataclass
    class Counter(ResettableImpl):
        value: int = 0
        history: list = field(default_factory=list)

        @classmethod
        def new(cls) -> "Counter":
            return cls()

        @view
        def double(self, x: int) -> int:
            return x * 2

        def add(self, a: int, b: int) -> int:
            self.value += a + b
            abi.emit("added", int(a + b))
            return self.value

        def increment(self) -> None:
            self.value += 1
            self.history.append(self.value)

        @view
        def snapshot(self) -> Ref[list]:
            return self.history

        @view
        @feeds("tuple[int, int]")
        def pairs(self) -> None:
            for index, value in enumerate(self.history):
                abi.feed((index, value))

        @custom
        def raw(self, data: bytes) -> bytes:
            return data


    @decode_output("raw")
    def decode_raw(data: bytes) -> str:
        return json.dumps(data.hex())
    '''
)


def make_definition(body: str, imports: str = "") -> str:
    """Wrap component body lines in a minimal valid definition."""
    header = textwrap.dedent(
        """
        from dataclasses import dataclass

        from forge import custom, decode_input, decode_output, encode_input, expose, feeds, view
        from forge_runtime import abi
        """
    )
    component = textwrap.dedent(
        """
        @dataclass
        class Widget:
            @staticmethod
            def new() -> "Widget":
                return Widget()
        """
    )
    return header + textwrap.dedent(imports) + component + textwrap.indent(textwrap.dedent(body), "    ")


@pytest.fixture
def bridge_source() -> str:
    return BRIDGE_SOURCE


@pytest.fixture
def bridge_model() -> CompiledModel:
    """Compiled model of the bridge definition."""
    return compile_definition(BRIDGE_SOURCE, module_path="bridge")


@pytest.fixture
def counter_model() -> CompiledModel:
    return compile_definition(COUNTER_SOURCE, module_path="counter")


@pytest.fixture
def fake_codec(monkeypatch):
    """A JSON-backed codec module registered as ``fake_codec``."""

    def json_to_binary(type_name: str, json_text: str) -> bytes:
        value = json.loads(json_text)
        if type_name == "int" and (not isinstance(value, int) or isinstance(value, bool)):
            raise ValueError(f"expected int, got {json_text}")
        return json.dumps([type_name, value]).encode()

    def binary_to_json(type_name: str, data: bytes) -> str:
        tag, value = json.loads(data.decode())
        if tag != type_name:
            raise ValueError(f"expected {type_name}, got {tag}")
        return json.dumps(value)

    module = types.ModuleType("fake_codec")
    module.json_to_binary = json_to_binary
    module.binary_to_json = binary_to_json
    monkeypatch.setitem(sys.modules, "fake_codec", module)
    return module


@pytest.fixture
def fake_boundary(monkeypatch):
    """
    A boundary runtime registered as ``fake_boundary``.

    Queue decoded arguments in ``args`` before calling a wrapper; each call
    is recorded in ``calls`` and emitted/fed values in ``emitted``/``fed``.
    """
    module = types.ModuleType("fake_boundary")
    module.args = []
    module.calls = []
    module.emitted = []
    module.fed = []

    def wrap_call(arg_len, input_type, call, *, readonly=False):
        arg = module.args.pop(0) if module.args else None
        result = call(arg)
        module.calls.append({"input_type": input_type, "readonly": readonly, "result": result})
        return arg_len

    module.wrap_call = wrap_call
    module.emit = lambda topic, payload: module.emitted.append((topic, payload))
    module.feed = module.fed.append
    monkeypatch.setitem(sys.modules, "fake_boundary", module)
    return module


@pytest.fixture
def counter_module(tmp_path: Path, monkeypatch, fake_boundary):
    """The counter definition written to disk and importable as ``counter``."""
    (tmp_path / "counter.py").write_text(COUNTER_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    sys.modules.pop("counter", None)
    yield tmp_path / "counter.py"
    sys.modules.pop("counter", None)
