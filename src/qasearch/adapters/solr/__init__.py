from qasearch.adapters.solr.adapter import SolrAdapter

__all__ = ["SolrAdapter"]
