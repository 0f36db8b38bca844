from dependency_injector import containers, providers
from invoice_api.v1_0.v1_containers import APIContainer
from invoice_api.storage.database import async_session

class ApplicationContainer(containers.DeclarativeContainer):
    db_session = providers.Object(async_session)

    api_container = providers.Container(
        APIContainer
    )
