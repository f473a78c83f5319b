from .scrape import ScrapeResult, scrape, scrape_document

__all__ = ["ScrapeResult", "scrape", "scrape_document"]
