from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import WebServiceUrl, WebServiceUrlsResponse

URL_BASES = ("simple", "full")


class ListWebServiceUrlsUseCase:
    """
    Lists active web services as bare hosts ("simple") or with scheme ("full").
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, base: str = "simple") -> Result[WebServiceUrlsResponse]:
        if base not in URL_BASES:
            return Return.err(Error("INVALID_BASE", 'Parameter "base" must be "simple" or "full"'))

        async with self.uow:
            web_services = await self.uow.web_services.list_active()

            if base == "full":
                urls = [WebServiceUrl(url=ws.base_url) for ws in web_services]
            else:
                urls = [WebServiceUrl(url=ws.url) for ws in web_services]

            return Return.ok(WebServiceUrlsResponse(urls=urls, total=len(urls), base=base))
