"""Identifiers of the services reachable through the application factory."""

from enum import StrEnum


class ServiceName(StrEnum):
    SETTINGS = "Settings"
    STORE = "Store"
    CACHE = "Cache"
    CACHE_FACTORY = "CacheFactory"
    NAMESPACE_EXAMINER = "NamespaceExaminer"
    TITLE_CREATOR = "TitleCreator"
    PAGE_CREATOR = "PageCreator"
    JOB_FACTORY = "JobFactory"
    FACTBOX_FACTORY = "FactboxFactory"
    PARSER_DATA = "ParserData"
    CONTENT_PARSER = "ContentParser"
    STORE_UPDATER = "StoreUpdater"
    IN_TEXT_ANNOTATION_PARSER = "InTextAnnotationParser"
    MW_COLLABORATOR_FACTORY = "MwCollaboratorFactory"
    SERIALIZER_FACTORY = "SerializerFactory"
    PROPERTY_ANNOTATOR_FACTORY = "PropertyAnnotatorFactory"
    PARSER_FUNCTION_FACTORY = "ParserFunctionFactory"
    QUERY_PROFILER_FACTORY = "QueryProfilerFactory"
    MAINTENANCE_FACTORY = "MaintenanceFactory"
    QUERY_PARSER = "QueryParser"
