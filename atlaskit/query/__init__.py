"""Collection query operators: filtering, sorting, pagination, field selection and searching."""