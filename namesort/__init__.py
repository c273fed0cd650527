from namesort.name_sorter import (
    CodeTable,
    DataLoadingService,
    EmptyNameError,
    MalformedRecordError,
    MissingCodeReport,
    NameComparator,
    NameSortError,
    NameSorter,
    SortConfig,
    SourceUnavailableError,
    SurnameSegmenter,
    run_batch,
    sort_names,
    split_name,
)
