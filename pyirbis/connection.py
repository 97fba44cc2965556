"""A module for connecting to an IRBIS64 server.

(C) Copyright 2025 The pyirbis Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
Connection -- Class for registering with the server and running commands.

Exported Functions:
connect -- Creates a connected Connection object.
new_client_id -- Picks a random client identifier.
"""

__all__ = ['connect', 'new_client_id', 'Connection']

import copy
import logging
import random

from typing import Any, Dict, Iterable, List, Optional  # pylint: disable=unused-import

from . import __version__
from .exception import EndOfStream, DataError, InterfaceError, OperationalError
from .session import Session, SessionException
from .query import ClientQuery
from .response import ServerResponse
from .record import MarcRecord
from .search import SearchParameters, FoundLine, TermInfo, TermPosting
from .util import prepare_format, irbis_to_lines

from . import protocol

_log = logging.getLogger("pyirbis")

MAX_ATTEMPTS = 10


def new_client_id():
    # type: () -> int
    """Return a random six digit client identifier."""
    return random.randint(100000, 999999)


async def connect(host='127.0.0.1',  # type: str
                  port=None,         # type: Optional[int]
                  user='',           # type: str
                  password='',       # type: str
                  database=protocol.DEFAULT_DATABASE,  # type: str
                  **kwargs
                  ):
    # type: (...) -> Connection
    """Return a new Connection object registered with the server.

    :param host: Hostname (and port if non-default) of the server.
    :param port: Port of the server; overrides a port given in host.
    :param user: Username to register with.
    :param password: Password to register with.
    :param database: Name of the default database.
    :param kwargs: Extra arguments to pass to Connection.
    :returns: A new, connected Connection object.
    """
    conn = Connection(host=host, port=port, user=user, password=password,
                      database=database, **kwargs)
    await conn.connect()
    return conn


class Connection(object):  # pylint: disable=too-many-public-methods
    """A client registration with an IRBIS64 server.

    Every command travels over its own TCP connection, so there is no
    socket to keep open between calls: "connected" means the server knows
    our client id.  Calls on one Connection must not overlap.

    Public Functions:
    connect -- Register with the server.
    disconnect -- Unregister from the server.
    execute -- Send a prepared query and return the raw response.
    read_record / write_record -- Record I/O.
    delete_record / undelete_record -- Flip the logical deletion bit.
    search / search_ex / search_read / search_single_record -- Searching.
    read_terms / read_postings -- Dictionary access.
    format_record -- Run a format on a record.
    get_max_mfn, list_files, no_op, actualize_record, create_database,
    create_dictionary, delete_database, truncate_database, unlock_database,
    unlock_records -- Server and database maintenance.
    """

    # PEP 249 recommends that all exceptions be exposed as attributes in the
    # Connection object.
    from .exception import Warning, Error, InterfaceError, DatabaseError
    from .exception import DataError, OperationalError, IntegrityError
    from .exception import InternalError, ProgrammingError, NotSupportedError

    __session = None       # type: Session
    __config = None        # type: Dict[str, Any]

    __connected = False
    __client_id = 0
    __query_id = 0
    __server_version = ''  # type: str
    __interval = 0

    def __init__(self, host='127.0.0.1',               # type: str
                 port=None,                          # type: Optional[int]
                 user='',                            # type: str
                 password='',                        # type: str
                 database=protocol.DEFAULT_DATABASE,  # type: str
                 workstation=protocol.CATALOGER,      # type: str
                 max_attempts=MAX_ATTEMPTS,           # type: int
                 session=None,                       # type: Optional[Session]
                 **kwargs
                 ):
        # type: (...) -> None
        """Construct a Connection object.  Nothing is sent to the server.

        :param host: Host (and port if needed) of the server.
        :param port: Port of the server; overrides a port given in host.
        :param user: Username to register with.
        :param password: Password to register with.
        :param database: Database used when an operation is not given one.
        :param workstation: Workstation code, e.g. 'C' for the cataloger.
        :param max_attempts: How many client ids to try when registering.
        :param session: Transport to use instead of a new Session.
        :param kwargs: Extra arguments to pass to Session (timeout,
                       connect_timeout, read_timeout, ip_version).  The
                       timeouts default to 30 seconds; pass timeout=None
                       to wait without a limit.
        """
        if workstation not in protocol.WORKSTATIONS:
            raise InterfaceError("Unknown workstation code: %s" % (workstation))
        if max_attempts < 1:
            raise InterfaceError("max_attempts must be at least 1")

        if session is None:
            session = Session(host, port=port, **kwargs)
            host, port = session.address, session.port
        elif port is None:
            port = protocol.IRBIS_PORT

        self.__session = session
        self.__user = user
        self.__password = password
        self.__database = database
        self.__workstation = workstation
        self.__max_attempts = max_attempts

        self.__config = {'driver_version': __version__,
                         'host': host,
                         'port': port,
                         'user': user,
                         'database': database,
                         'workstation': workstation,
                         'max_attempts': max_attempts,
                         'options': copy.deepcopy(kwargs)}

    # Attributes read by ClientQuery

    @property
    def username(self):
        # type: () -> str
        return self.__user

    @property
    def password(self):
        # type: () -> str
        return self.__password

    @property
    def workstation(self):
        # type: () -> str
        return self.__workstation

    @property
    def client_id(self):
        # type: () -> int
        """Return the client id; it changes on every registration attempt."""
        return self.__client_id

    @property
    def query_id(self):
        # type: () -> int
        """Return the sequence number of the next query."""
        return self.__query_id

    @property
    def database(self):
        # type: () -> str
        """Return the default database name."""
        return self.__database

    @database.setter
    def database(self, value):
        # type: (str) -> None
        self.__database = value

    @property
    def connected(self):
        # type: () -> bool
        return self.__connected

    @property
    def server_version(self):
        # type: () -> str
        return self.__server_version

    @property
    def interval(self):
        # type: () -> int
        """Return the confirmation interval (minutes) given at registration."""
        return self.__interval

    @property
    def session(self):
        # type: () -> Session
        return self.__session

    def connection_config(self):
        # type: () -> Dict[str, Any]
        """Returns a copy of the connection configuration.

        Configuration:
          client_id      :int:  Current client id (0 before registration)
          connected      :bool: True if registered with the server
          database       :str:  Default database
          driver_version :str:  Version of this driver
          host           :str:  Address of the server
          interval       :int:  Confirmation interval given by the server
          max_attempts   :int:  Registration attempts allowed
          options        :dict: Extra transport options
          port           :int:  Port of the server
          query_id       :int:  Sequence number of the next query
          server_version :str:  Version reported by the server
          user           :str:  Name of the registered user
          workstation    :str:  Workstation code

        :returns: Copy of the connection config names and values.
                  Modifying these values has no effect on the connection.
        """
        config = copy.deepcopy(self.__config)
        config['database'] = self.__database
        config['client_id'] = self.__client_id
        config['query_id'] = self.__query_id
        config['server_version'] = self.__server_version
        config['interval'] = self.__interval
        config['connected'] = self.__connected
        return config

    def _check_connected(self):
        # type: () -> None
        """Check if the connection is registered.

        :raises InterfaceError: If it is not.
        """
        if not self.__connected:
            raise InterfaceError("connection is not connected")

    async def _exchange(self, query):
        # type: (ClientQuery) -> ServerResponse
        """Send the query and wrap the answer; no state is changed."""
        packet = query.encode()
        _log.debug("%s: client %d, query %d, sending %d bytes",
                   query.command, self.__client_id, self.__query_id,
                   len(packet))
        data = await self.__session.exchange(packet)
        try:
            response = ServerResponse(data)
        except (EndOfStream, DataError) as e:
            raise SessionException("Malformed answer to command %s: %s"
                                   % (query.command, str(e)))
        _log.debug("%s: client %d, query %d, received %d bytes",
                   query.command, self.__client_id, self.__query_id,
                   len(data))
        return response

    async def execute(self, query):
        # type: (ClientQuery) -> ServerResponse
        """Send a query and return the response.

        The sequence number is advanced once the answer is in.  The return
        code is left for the caller to check.

        :raises InterfaceError: If not connected.
        :raises SessionException: On transport failure.
        """
        self._check_connected()
        response = await self._exchange(query)
        self.__query_id += 1
        return response

    async def connect(self):
        # type: () -> bool
        """Register with the server.

        A client id the server already knows is replaced by a fresh one, up
        to max_attempts times.

        :returns: True
        :raises DatabaseError: If the server refuses the registration.
        :raises OperationalError: If every client id tried was taken.
        """
        if self.__connected:
            return True

        for _ in range(self.__max_attempts):
            self.__client_id = new_client_id()
            self.__query_id = 1

            query = ClientQuery(self, protocol.REGISTER_CLIENT)
            query.addAnsi(self.__user).newLine()
            query.addAnsi(self.__password)

            response = await self._exchange(query)
            code = response.getReturnCode()
            if code == protocol.CLIENT_ALREADY_EXISTS:
                _log.warning("client id %d is already registered, retrying",
                             self.__client_id)
                continue
            response.checkReturnCode()

            self.__server_version = response.server_version
            self.__interval = self._read_interval(response, code)
            self.__connected = True
            _log.info("registered with %s:%s as client %d (server %s)",
                      self.__config['host'], self.__config['port'],
                      self.__client_id, self.__server_version)
            return True

        raise OperationalError("Could not register a client id after %d attempts"
                               % (self.__max_attempts),
                               protocol.CLIENT_ALREADY_EXISTS)

    @staticmethod
    def _read_interval(response, code):
        # type: (ServerResponse, int) -> int
        # The interval follows the return code; a server that sends nothing
        # more reports it as the return code itself.
        try:
            line = response.readUtf().strip()
        except EndOfStream:
            return code
        try:
            return int(line)
        except ValueError:
            return code

    async def disconnect(self):
        # type: () -> bool
        """Unregister from the server.

        The answer is not checked, and a transport failure is only logged:
        the connection is always left disconnected.

        :returns: True
        """
        if not self.__connected:
            return True

        query = ClientQuery(self, protocol.UNREGISTER_CLIENT)
        query.addAnsi(self.__user)
        try:
            await self.execute(query)
        except SessionException as e:
            _log.warning("failed to unregister client %d: %s",
                         self.__client_id, str(e))
        finally:
            self.__connected = False

        _log.info("unregistered client %d", self.__client_id)
        return True

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()

    async def _simple(self, command, *params):
        # type: (str, Any) -> ServerResponse
        """Run a command whose parameters are ANSI lines; check the code."""
        self._check_connected()
        query = ClientQuery(self, command)
        for param in params:
            if isinstance(param, int):
                query.add(param).newLine()
            else:
                query.addAnsi(param).newLine()
        response = await self.execute(query)
        response.checkReturnCode()
        return response

    async def actualize_record(self, database, mfn):
        # type: (str, int) -> None
        """Actualize the dictionary for one record."""
        await self._simple(protocol.ACTUALIZE_RECORD, database, mfn)

    async def create_database(self, database, description, reader_access=True):
        # type: (str, str, bool) -> None
        """Create a database.

        :param reader_access: True if readers may see the database.
        """
        await self._simple(protocol.CREATE_DATABASE, database, description,
                           1 if reader_access else 0)

    async def create_dictionary(self, database):
        # type: (str) -> None
        await self._simple(protocol.CREATE_DICTIONARY, database)

    async def delete_database(self, database):
        # type: (str) -> None
        await self._simple(protocol.DELETE_DATABASE, database)

    async def truncate_database(self, database):
        # type: (str) -> None
        """Delete every record of a database."""
        await self._simple(protocol.EMPTY_DATABASE, database)

    async def unlock_database(self, database):
        # type: (str) -> None
        await self._simple(protocol.UNLOCK_DATABASE, database)

    async def unlock_records(self, mfns, database=None):
        # type: (Iterable[int], Optional[str]) -> None
        """Unlock the given records.  An empty list sends nothing."""
        self._check_connected()
        mfns = list(mfns)
        if not mfns:
            return
        await self._simple(protocol.UNLOCK_RECORDS,
                           database or self.__database, *mfns)

    async def get_max_mfn(self, database=None):
        # type: (Optional[str]) -> int
        """Return the MFN the next new record of the database will get."""
        self._check_connected()
        query = ClientQuery(self, protocol.GET_MAX_MFN)
        query.addAnsi(database or self.__database)
        response = await self.execute(query)
        return response.checkReturnCode()

    async def no_op(self):
        # type: () -> None
        """Tell the server we are still here."""
        await self._simple(protocol.NOP)

    async def list_files(self, *specs):
        # type: (str) -> List[str]
        """Return the names of the server files matching the file specs.

        Specifications look like '2.IBIS.*.mnu'.  This answer has no return
        code.
        """
        self._check_connected()
        query = ClientQuery(self, protocol.LIST_FILES)
        for spec in specs:
            query.addAnsi(spec).newLine()
        response = await self.execute(query)
        result = []
        for line in response.readRemainingAnsiLines():
            result.extend(name for name in irbis_to_lines(line) if name)
        return result

    async def read_record(self, mfn, version=0, database=None):
        # type: (int, int, Optional[str]) -> MarcRecord
        """Read a record.

        A deleted, locked or version-less record is still returned; its
        status tells which.

        :param version: Version to read, 0 for the current one.
        """
        self._check_connected()
        database = database or self.__database
        query = ClientQuery(self, protocol.READ_RECORD)
        query.addAnsi(database).newLine()
        query.add(mfn).newLine()
        if version:
            query.add(version).newLine()
        response = await self.execute(query)
        code = response.checkReturnCode(protocol.READ_RECORD_CODES)

        record = MarcRecord(database)
        record.decode(response.readRemainingUtfLines())
        if not record.mfn:
            record.mfn = mfn
        record.status |= protocol.READ_RECORD_STATUS.get(code, 0)
        return record

    async def write_record(self, record, lock=False, actualize=True,
                           dont_parse=False):
        # type: (MarcRecord, bool, bool, bool) -> int
        """Write a new or modified record.

        Unless dont_parse is set the record is refreshed from the server's
        answer (MFN, status, version and fields).

        :returns: The new max MFN of the database.
        """
        self._check_connected()
        database = record.database or self.__database
        query = ClientQuery(self, protocol.UPDATE_RECORD)
        query.addAnsi(database).newLine()
        query.add(1 if lock else 0).newLine()
        query.add(1 if actualize else 0).newLine()
        query.addUtf(record.encode()).newLine()
        response = await self.execute(query)
        code = response.checkReturnCode()

        if not dont_parse:
            lines = response.readRemainingUtfLines()
            if lines:
                merged = lines[:1]
                for line in lines[1:]:
                    merged.extend(line.split(protocol.SHORT_DELIMITER))
                record.decode(merged)
            record.database = database
        return code

    async def delete_record(self, mfn):
        # type: (int) -> MarcRecord
        """Mark a record as logically deleted, unless it already is."""
        record = await self.read_record(mfn)
        if not record.is_deleted():
            record.status |= protocol.LOGICALLY_DELETED
            await self.write_record(record)
        return record

    async def undelete_record(self, mfn):
        # type: (int) -> MarcRecord
        """Clear the logical deletion mark of a deleted record."""
        record = await self.read_record(mfn)
        if record.is_deleted():
            record.status &= ~protocol.LOGICALLY_DELETED
            await self.write_record(record)
        return record

    async def format_record(self, format, mfn):  # pylint: disable=redefined-builtin
        # type: (str, int) -> str
        """Return the record formatted by the server.

        A trailing line break is removed.
        """
        self._check_connected()
        query = ClientQuery(self, protocol.FORMAT_RECORD)
        query.addAnsi(self.__database).newLine()
        query.addAnsi(prepare_format(format)).newLine()
        query.add(1).newLine()
        query.add(mfn).newLine()
        response = await self.execute(query)
        response.checkReturnCode()
        return response.readRemainingUtfText().rstrip("\r\n")

    async def search_ex(self, parameters):
        # type: (SearchParameters) -> List[FoundLine]
        """Search with full control over the parameters."""
        self._check_connected()
        query = ClientQuery(self, protocol.SEARCH)
        query.addAnsi(parameters.database or self.__database).newLine()
        query.addUtf(parameters.expression).newLine()
        query.add(parameters.number_of_records).newLine()
        query.add(parameters.first_record).newLine()
        query.addAnsi(prepare_format(parameters.format or '')).newLine()
        query.add(parameters.min_mfn).newLine()
        query.add(parameters.max_mfn).newLine()
        query.addUtf(parameters.sequential).newLine()
        response = await self.execute(query)
        response.checkReturnCode()
        if response.eof:
            return []
        # total number of hits, not necessarily all of them returned
        response.readInteger()
        return FoundLine.parse(response.readRemainingUtfLines())

    async def search(self, expression):
        # type: (str) -> List[int]
        """Return the MFNs of the records matching the expression."""
        found = await self.search_ex(SearchParameters(expression))
        return FoundLine.to_mfn(found)

    async def search_read(self, expression, limit=0):
        # type: (str, int) -> List[MarcRecord]
        """Search and return the found records themselves.

        :param limit: Maximum number of records, 0 for no limit.
        """
        parameters = SearchParameters(expression, number_of_records=limit,
                                      format=protocol.ALL_FORMAT)
        found = await self.search_ex(parameters)
        result = []
        for item in found:
            record = MarcRecord.parse(irbis_to_lines(item.description or ''),
                                      self.__database)
            if not record.mfn:
                record.mfn = item.mfn
            result.append(record)
        return result

    async def search_single_record(self, expression):
        # type: (str) -> Optional[MarcRecord]
        """Return one record matching the expression, or None."""
        found = await self.search_read(expression, 1)
        return found[0] if found else None

    async def read_terms(self, start_term, number=100, reverse=False,
                         database=None, format=None):  # pylint: disable=redefined-builtin
        # type: (str, int, bool, Optional[str], Optional[str]) -> List[TermInfo]
        """Read dictionary terms starting at start_term.

        Running off either end of the dictionary is not an error.
        """
        self._check_connected()
        command = protocol.READ_TERMS_REVERSE if reverse else protocol.READ_TERMS
        query = ClientQuery(self, command)
        query.addAnsi(database or self.__database).newLine()
        query.addUtf(start_term).newLine()
        query.add(number).newLine()
        if format:
            query.addAnsi(prepare_format(format)).newLine()
        response = await self.execute(query)
        response.checkReturnCode(protocol.READ_TERMS_CODES)
        return TermInfo.parse(response.readRemainingUtfLines())

    async def read_postings(self, term, number=0, first=1, database=None,
                            format=None):  # pylint: disable=redefined-builtin
        # type: (str, int, int, Optional[str], Optional[str]) -> List[TermPosting]
        """Read the postings of a dictionary term.

        :param number: Maximum number of postings, 0 for all.
        :param first: Index of the first posting (from 1).
        """
        self._check_connected()
        query = ClientQuery(self, protocol.READ_POSTINGS)
        query.addAnsi(database or self.__database).newLine()
        query.add(number).newLine()
        query.add(first).newLine()
        query.addAnsi(prepare_format(format or '')).newLine()
        query.addUtf(term).newLine()
        response = await self.execute(query)
        response.checkReturnCode()
        return TermPosting.parse(response.readRemainingUtfLines())
