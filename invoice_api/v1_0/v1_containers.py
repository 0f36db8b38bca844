from dependency_injector import containers, providers
from invoice_api.v1_0.repositories import CustomerRepository
from invoice_api.v1_0.services import CustomerService

class APIContainer(containers.DeclarativeContainer):
    customer_repository = providers.Singleton(CustomerRepository)

    customer_service = providers.Singleton(
        CustomerService,
        customer_repository = customer_repository
    )
