# ticketdesk

ticketdesk is a small HTTP service for keeping track of tickets. Each ticket
has an id, a title, a description and a status. The service offers create,
read, update and delete over JSON, health-check endpoints, an information
endpoint and an OpenAPI document describing itself. Tickets are stored in an
SQLite database.

## Installing

```
pip install .
```

For running the tests as well:

```
pip install ".[test]"
pytest
```

## Running the server

```
ticketdesk
```

Options, each of which can also be set through an environment variable:

| Option           | Environment variable | Default                |
|------------------|----------------------|------------------------|
| `--http-url`     | `HTTP_URL`           | `127.0.0.1:8080`       |
| `--database-url` | `DATABASE_URL`       | `sqlite:///tickets.db` |
| `--environment`  | `ENVIRONMENT`        | `development`          |

`--http-url` is a `host:port` pair; anything else is rejected with a
`ValueError`. The log level is taken from `LOG_LEVEL` (default `DEBUG`).
A `.env` file in the working directory is read at start-up, before the
options are parsed, so it can supply any of these variables.

The database URL may be `sqlite:///path/to/file.db`, `sqlite://` (an
in-memory database), or a plain file path. Any other scheme, such as
`postgres://`, is refused with `unsupported database scheme`. The `tickets`
table is created on start-up if it does not exist.

## Endpoints

Tickets:

| Method | Path                 | Result                                           |
|--------|----------------------|--------------------------------------------------|
| GET    | `/api/tickets`       | all tickets, in the order they were first stored |
| GET    | `/api/tickets/<id>`  | one ticket, or 404 if there is none              |
| POST   | `/api/tickets`       | creates a ticket, answers 201                    |
| PUT    | `/api/tickets/<id>`  | creates or replaces the ticket with id, answers 201 |
| DELETE | `/api/tickets/<id>`  | removes the ticket if present, answers 204       |

Health, information and description:

| Method | Path                       | Result                                    |
|--------|----------------------------|-------------------------------------------|
| GET    | `/api/health/startup`      | `{"data": {"status": "Ok"}}`              |
| GET    | `/api/health/live`         | `{"data": {"status": "Ok"}}`              |
| GET    | `/api/health/ready`        | `{"data": {"status": "Ok"}}`              |
| GET    | `/api/info`                | `{"data": {"environment": "<name>"}}`     |
| GET    | `/api-docs/openapi.json`   | the OpenAPI 3.1 document                  |

Successful responses wrap their payload in a `data` key. A ticket looks like:

```json
{
  "data": {
    "id": "6f1c2b7e-8d0a-4a6e-9c1d-3b2f4e5a6c7d",
    "title": "Printer on floor two is jammed",
    "description": "Paper stuck in tray 3.",
    "status": "to_do"
  }
}
```

A new ticket starts with status `to_do`; the other statuses are
`in_progress`, `done` and `closed`.

Creating a ticket takes a title (1 to 255 characters) and a non-empty
description, sent as `application/json`:

```json
{"title": "Printer on floor two is jammed", "description": "Paper stuck in tray 3."}
```

Updating takes the same fields plus a `status`. In the request the status
is written as one of `ToDo`, `InProgress`, `Done` or `Closed`; responses
report it as `to_do`, `in_progress`, `done` or `closed`.

### Errors

Errors come back as a JSON object with the HTTP code and a message. Failed
validation adds a list of the offending fields:

```json
{
  "code": 400,
  "message": "Validation error",
  "errors": [
    {"field": "title", "message": "Title must be between 1 and 255 characters"}
  ]
}
```

- A body that is not JSON, or not sent as JSON, gives `400` with a message
  starting `Json deserialize error:` or `Content type error`; a missing field,
  a field of the wrong type or an unknown status name also gives
  `Json deserialize error: ...`.
- An unknown ticket id gives `404` with the message
  `item with id <id> not found`.
- Any other failure gives `500` with `Internal server error`.
- A path id that is not a UUID, or an unsupported method, is answered by
  Flask's own routing error.

## Using it from Python

`ticketdesk.server.build_app(database_url, environment)` returns a Flask
(WSGI) application backed by the given database, suitable for any WSGI
server or for Flask's test client:

```python
from ticketdesk.server import build_app

app = build_app("tickets.db", "development")
client = app.test_client()

created = client.post(
    "/api/tickets",
    json={"title": "Broken chair", "description": "Leg is loose."},
).get_json()["data"]

print(client.get(f"/api/tickets/{created['id']}").get_json())
```

The pieces can also be used on their own:

- `ticketdesk.domain`: `Ticket` (with `Ticket.create(title, description)`),
  `TicketStatus` (with `TicketStatus.parse(value)`, which reads a status
  name case-insensitively and falls back to `TO_DO`), and the `DomainError`
  family (`NotFoundError`, `InternalError`).
- `ticketdesk.application`: the commands (`CreateTicketCommand`,
  `UpdateTicketCommand`, `DeleteTicketCommand`), `FindTicketQuery`,
  `TicketDto`, the abstract `TicketRepository` and one handler per operation,
  each taking a repository and offering `execute`.
- `ticketdesk.repository`: `configure(database_url)`, which opens the SQLite
  database and creates the table, `SqlTicketRepository(connection)`, and
  `TicketRecord`, the stored form of a ticket with its timestamps.
- `ticketdesk.errors`: `ApiError` and `ValidationFieldError`.
- `ticketdesk.schemas`: the request bodies (`CreateTicketRequest`,
  `UpdateTicketRequest`, each with `from_json`) and the response bodies.
- `ticketdesk.api`: `AppState`, `create_app(state)` and `openapi_spec()`.

Any object that implements `TicketRepository` can be placed in an
`AppState` and handed to `create_app`, which makes it easy to run the API
against an in-memory store in tests.

## What it does not do

- Storage is SQLite only; there is no support for other database servers.
- The OpenAPI document is served as JSON, but there is no interactive
  documentation page.
- The `ticketdesk` command runs Flask's built-in server. For production use,
  serve the application from `build_app` with a WSGI server of your choice.
- There are no users, authentication or permissions.