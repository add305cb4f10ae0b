# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Annotated domain classes shared by the test suite.

Kept at module level so that string and forward-referenced annotations resolve against this module's globals.
"""
from collections import deque
from dataclasses import dataclass, field
from typing import Annotated, ClassVar, Deque, FrozenSet, List, Optional, Sequence, Set, Tuple

from bapimap import (bapi, bapi_structure, Import, Export, Table, Parameter, Convert, BooleanConverter,
                     NumberStringConverter)


################################################################################
# Minimal scenario classes
################################################################################


@bapi("BAPI_TRANSACTION_COMMIT")
class Commit:
    wait: Annotated[int, Import(), Parameter("FIELD")] = 0


@bapi("EMPTY")
class NoParameters:
    plain_state: int = 0


class Unmapped:
    value: Annotated[int, Import(), Parameter("VALUE")] = 0


################################################################################
# Structures with inheritance
################################################################################


@bapi_structure
class StructureSuperClass:
    structure_param_super_class: Annotated[str, Parameter("ABAP_FIELD")] = ""


@bapi_structure
class StructureSubClass(StructureSuperClass):
    structure_param_sub_class: Annotated[int, Parameter("ABAP_FIELD")] = 0


@bapi("test")
class SampleBapiClass:
    int_param: Annotated[int, Import(), Parameter("ABAP_FIELD")] = 0
    table_param: Annotated[Set[StructureSubClass], Table(), Parameter("ABAP_TABLE")] = field(default_factory=set)


################################################################################
# Flight booking domain
################################################################################


@bapi_structure
@dataclass
class Address:
    city: Annotated[str, Parameter("CITY")] = ""
    country: Annotated[str, Parameter("COUNTRY")] = ""


@bapi_structure
@dataclass
class BaseRow:
    line_id: Annotated[int, Parameter("LINE_ID")] = 0
    comment: Annotated[str, Parameter("COMMENT")] = ""


@bapi_structure
@dataclass
class Flight(BaseRow):
    comment: Annotated[str, Parameter("FLIGHT_COMMENT")] = ""
    carrier: Annotated[str, Parameter("CARRID")] = ""
    connection: Annotated[int, Parameter("CONNID"), Convert(NumberStringConverter)] = 0
    smoker: Annotated[bool, Parameter("SMOKER"), Convert(BooleanConverter)] = False
    departure: Annotated[Optional[Address], Parameter("DEPARTURE")] = None


@bapi_structure
@dataclass
class Return:
    type: Annotated[str, Parameter("TYPE")] = ""
    message: Annotated[str, Parameter("MESSAGE")] = ""


@dataclass
class BaseCall:
    client: Annotated[str, Import(), Parameter("CLIENT")] = "000"
    returns: Annotated[List[Return], Table(), Parameter("RETURN")] = field(default_factory=list)


@bapi("BAPI_FLIGHT_GETLIST")
@dataclass
class FlightList(BaseCall):
    airline: Annotated[str, Import(), Parameter("AIRLINE")] = ""
    max_rows: Annotated[Optional[int], Import(), Parameter("MAX_ROWS")] = None
    with_smokers: Annotated[bool, Import(), Parameter("SMOKERS"), Convert(BooleanConverter)] = False
    agency: Annotated[Optional[Address], Import(), Parameter("AGENCY_ADDRESS")] = None
    total: Annotated[int, Export(), Parameter("TOTAL")] = 0
    last_flight: Annotated[Optional[Flight], Export(), Parameter("LAST_FLIGHT")] = None
    stopovers: Annotated[Tuple[Address, ...], Export(), Parameter("STOPOVERS")] = ()
    flights: Annotated[List[Flight], Table(), Parameter("FLIGHT_LIST")] = field(default_factory=list)
    note: Annotated[str, Parameter("NOTE")] = ""
    cache_hits: int = 0
    version: ClassVar[int] = 1


@bapi("COLLECTIONS")
class CollectionTables:
    as_tuple: Annotated[Tuple[Address, ...], Table(), Parameter("TUPLE")] = ()
    as_sequence: Annotated[Sequence[Address], Table(), Parameter("SEQUENCE")] = ()
    as_frozenset: Annotated[FrozenSet[Address], Table(), Parameter("FROZENSET")] = frozenset()
    as_deque: Annotated[Deque[Address], Table(), Parameter("DEQUE")] = field(default_factory=deque)


################################################################################
# Redeclared fields
################################################################################


@bapi("BASE_CALL")
class ParentCall:
    shared: Annotated[str, Import(), Parameter("PARENT_NAME")] = ""
    parent_only: Annotated[int, Export(), Parameter("PARENT_ONLY")] = 0


@bapi("CHILD_CALL")
class ChildCall(ParentCall):
    shared: Annotated[str, Import(), Parameter("CHILD_NAME")] = ""
    child_only: Annotated[int, Export(), Parameter("CHILD_ONLY")] = 0


class UndecoratedChild(ChildCall):
    extra: Annotated[int, Import(), Parameter("EXTRA")] = 0
